"""
Where: services/catalog/services/remote.py
What: Base class for typed clients of sibling gRPC services.
Why: Every outbound call follows the same skeleton: span and metrics, registry lookup,
     fresh channel, unary call carrying trace metadata and the request
     deadline, channel close on every exit path.
"""

import logging
import time
from typing import Any, Callable

import grpc

from services.common.core.metrics import observe_request
from services.common.core.request_context import remaining_timeout
from services.common.core.trace import outgoing_metadata, start_span

from ..core.exceptions import CreateClientError, ServiceNotFoundError
from .discovery import DiscoveryClient
from .grpc_channel import create_insecure_channel

logger = logging.getLogger("catalog.remote")

ChannelFactory = Callable[[str], grpc.aio.Channel]


class RemoteServiceClient:
    """
    Base adapter. Subclasses set `stub_class` to the generated gRPC stub and
    call `_invoke` once per operation.

    Channels are never shared between calls. Remote errors
    (grpc.aio.AioRpcError) propagate unchanged; callers do not retry.
    """

    stub_class: Any = None

    def __init__(
        self,
        discovery: DiscoveryClient,
        service_name: str,
        channel_factory: ChannelFactory = create_insecure_channel,
    ):
        self.discovery = discovery
        self.service_name = service_name
        self._channel_factory = channel_factory

    async def _invoke(self, op: str, method: str, request: Any) -> Any:
        """Call `method` (a stub attribute such as "ValidateToken") with `request`."""
        start = time.perf_counter()
        code = grpc.StatusCode.OK
        with start_span(op) as span:
            span.set_attribute("rpc.service", self.service_name)
            span.set_attribute("rpc.method", method)
            try:
                return await self._call(op, method, request)
            except ServiceNotFoundError:
                code = grpc.StatusCode.NOT_FOUND
                raise
            except CreateClientError:
                code = grpc.StatusCode.UNAVAILABLE
                raise
            except grpc.aio.AioRpcError as exc:
                code = exc.code()
                raise
            except Exception:
                code = grpc.StatusCode.UNKNOWN
                raise
            finally:
                span.set_attribute("rpc.grpc.status_code", code.value[0])
                observe_request(time.perf_counter() - start, code.value[0], op)

    async def _call(self, op: str, method: str, request: Any) -> Any:
        try:
            address = await self.discovery.find_service(self.service_name)
        except ServiceNotFoundError:
            logger.debug(
                "failed to find service",
                extra={"op": op, "service": self.service_name},
            )
            raise

        try:
            channel = self._channel_factory(address)
        except Exception as exc:
            logger.debug(
                "failed to create client",
                extra={"op": op, "address": address, "error": str(exc)},
            )
            raise CreateClientError(address, exc) from exc

        try:
            stub = self.stub_class(channel)
            return await getattr(stub, method)(
                request,
                timeout=remaining_timeout(),
                metadata=outgoing_metadata(),
            )
        finally:
            await channel.close()
