"""
Category routes. Categories are addressed by slug.
"""

from fastapi import APIRouter, Request, status

from ...config import config
from ...core.pagination import is_searchable, parse_page_params
from ...core.validation import validate_category
from ...models import Category
from ..deps import ControllerDep, UidDep
from ..handler import instrumented, read_body

router = APIRouter(prefix="/api", tags=["categories"])


@router.get("/category/filters/search")
@instrumented("category.categoryFiltersSearch.handler")
async def category_filters_search(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.SEARCH_PAGE_SIZE)
    if not is_searchable(params.query, config.MIN_SEARCH_QUERY_LENGTH):
        return []
    return await ctrl.category_filters_search(params.query, params.page, params.size)


@router.get("/category/search")
@instrumented("category.categorySearch.handler")
async def category_search(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.SEARCH_PAGE_SIZE)
    if not is_searchable(params.query, config.MIN_SEARCH_QUERY_LENGTH):
        return []
    return await ctrl.category_search(params.query, params.page, params.size)


@router.get("/category/filters/{slug}")
@instrumented("category.listCategoryFilters.handler")
async def list_category_filters(slug: str, ctrl: ControllerDep):
    return await ctrl.list_category_filters(slug)


@router.get("/category/{slug}/items")
@instrumented("items.listCategoryItems.handler")
async def list_category_items(slug: str, request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_category_items(
        slug, params.page, params.size, params.filters, params.sort
    )


@router.get("/category")
@instrumented("category.listCategories.handler")
async def list_categories(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_categories(params.page, params.size)


@router.post("/category")
@instrumented("category.createCategory.handler", status.HTTP_201_CREATED)
async def create_category(request: Request, caller: UidDep, ctrl: ControllerDep):
    category = await read_body(request, Category)
    validate_category(category)
    return await ctrl.create_category(category)


@router.get("/category/{slug}")
@instrumented("category.getCategory.handler")
async def get_category(slug: str, ctrl: ControllerDep):
    return await ctrl.get_category(slug)


@router.put("/category/{slug}")
@instrumented("category.updateCategory.handler")
async def update_category(slug: str, request: Request, caller: UidDep, ctrl: ControllerDep):
    category = await read_body(request, Category)
    validate_category(category)
    await ctrl.update_category(slug, category)
    return "OK"


@router.delete("/category/{slug}")
@instrumented("category.deleteCategory.handler", status.HTTP_204_NO_CONTENT)
async def delete_category(slug: str, caller: UidDep, ctrl: ControllerDep):
    await ctrl.delete_category(slug)
    return "OK"
