"""
Product catalog service.

HTTP API for items, categories, favorites, promotions and orders.
Authentication and the SEO/banner records are delegated to sibling services
reached over gRPC through the service registry.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.routes import categories, favorites, health, items, orders, promotions
from .config import config
from .core.exceptions import (
    CatalogError,
    catalog_exception_handler,
    global_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .core.logging_config import setup_logging
from .lifecycle import manage_lifespan
from .middleware import recover_panic_middleware, tracing_middleware

# Logger setup
setup_logging()
logger = logging.getLogger("catalog.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with manage_lifespan(app, config):
        yield


app = FastAPI(
    title="Product Catalog", version="1.0.0", lifespan=lifespan, root_path=config.root_path
)

# Registered innermost first: panic recovery wraps tracing.
app.middleware("http")(tracing_middleware)
app.middleware("http")(recover_panic_middleware)

# Register exception handlers.
app.add_exception_handler(Exception, global_exception_handler)
app.add_exception_handler(CatalogError, catalog_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

for module in (health, items, categories, favorites, promotions, orders):
    app.include_router(module.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=config.BIND_HOST,
        port=config.PORT,
        timeout_keep_alive=int(config.IDLE_TIMEOUT),
    )
