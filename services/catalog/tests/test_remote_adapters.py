from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import grpc
import pytest
from google.protobuf import empty_pb2
from opentelemetry.sdk.trace import TracerProvider

from services.catalog.core.exceptions import CreateClientError, ServiceNotFoundError
from services.catalog.models import SEO, Banner, BannerSlide
from services.catalog.pb import par_pro_pb2
from services.catalog.services.banner import BANNER_CATEGORY, BannerClient
from services.catalog.services.discovery import DiscoveryClient
from services.catalog.services.grpc_channel import normalize_target
from services.catalog.services.identity import IdentityClient
from services.catalog.services.seo import SEO_ITEM, SEOClient
from services.common.core import request_context


class FakeChannel:
    """Records unary calls made through a generated stub and answers each with
    the next queued reply."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []
        self.closed = 0

    def unary_unary(self, method, request_serializer, response_deserializer, **kwargs):
        async def call(request, timeout=None, metadata=None):
            self.calls.append(
                {
                    "method": method,
                    "request": request,
                    "wire": request_serializer(request),
                    "timeout": timeout,
                    "metadata": dict(metadata or []),
                }
            )
            reply = self.replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return response_deserializer(reply.SerializeToString())

        return call

    async def close(self):
        self.closed += 1


class ChannelFactory:
    def __init__(self, *replies):
        self.channels = []
        self.addresses = []
        self.replies = replies

    def __call__(self, address):
        self.addresses.append(address)
        channel = FakeChannel([self.replies[len(self.channels)]])
        self.channels.append(channel)
        return channel


def _rpc_error(code=grpc.StatusCode.UNAVAILABLE, details="unavailable"):
    return grpc.aio.AioRpcError(
        code, grpc.aio.Metadata(), grpc.aio.Metadata(), details=details
    )


@pytest.fixture
def discovery():
    mock = AsyncMock(spec=DiscoveryClient)
    mock.find_service.return_value = "grpc://sso.internal:9000"
    return mock


@pytest.mark.asyncio
async def test_validate_token(discovery):
    factory = ChannelFactory(par_pro_pb2.BoolSSOMsg(bool=True))
    identity = IdentityClient(discovery, "sso", channel_factory=factory)

    assert await identity.validate_token("valid") is True

    discovery.find_service.assert_awaited_once_with("sso")
    call = factory.channels[0].calls[0]
    assert call["method"] == "/par_pro.SSO/ValidateToken"
    assert call["request"].string == "valid"
    assert factory.channels[0].closed == 1


@pytest.mark.asyncio
async def test_parse_claims_is_a_single_call(discovery):
    factory = ChannelFactory(par_pro_pb2.TokenSSOMsg(token="user-id"))
    identity = IdentityClient(discovery, "sso", channel_factory=factory)

    assert await identity.parse_claims("valid") == "user-id"

    discovery.find_service.assert_awaited_once_with("sso")
    assert len(factory.channels) == 1
    call = factory.channels[0].calls[0]
    assert call["method"] == "/par_pro.SSO/ParseClaims"
    assert par_pro_pb2.StringSSOMsg.FromString(call["wire"]).string == "valid"
    assert factory.channels[0].closed == 1


@pytest.mark.asyncio
async def test_parse_claims_rejection_is_remote_error(discovery):
    factory = ChannelFactory(_rpc_error(grpc.StatusCode.UNAUTHENTICATED, "token expired"))
    identity = IdentityClient(discovery, "sso", channel_factory=factory)

    with pytest.raises(grpc.aio.AioRpcError) as exc_info:
        await identity.parse_claims("expired")

    assert exc_info.value.details() == "token expired"
    assert factory.channels[0].closed == 1


@pytest.mark.asyncio
async def test_resolve_token(discovery):
    factory = ChannelFactory(
        par_pro_pb2.UserSSOMsg(id="user-id", name="Ivan", email="ivan@example.com")
    )
    identity = IdentityClient(discovery, "sso", channel_factory=factory)

    assert await identity.resolve_token("valid") == "user-id"
    assert factory.channels[0].calls[0]["method"] == "/par_pro.SSO/GetUserByToken"


@pytest.mark.asyncio
async def test_remote_error_propagates_and_closes_channel(discovery):
    factory = ChannelFactory(_rpc_error(grpc.StatusCode.NOT_FOUND, "user not found"))
    identity = IdentityClient(discovery, "sso", channel_factory=factory)

    with pytest.raises(grpc.aio.AioRpcError) as exc_info:
        await identity.resolve_token("valid")

    assert exc_info.value.code() == grpc.StatusCode.NOT_FOUND
    assert factory.channels[0].closed == 1


@pytest.mark.asyncio
async def test_discovery_failure_opens_no_channel(discovery):
    discovery.find_service.side_effect = ServiceNotFoundError("seo")
    factory = ChannelFactory()
    seo = SEOClient(discovery, "seo", channel_factory=factory)

    with pytest.raises(ServiceNotFoundError):
        await seo.delete(SEO_ITEM, "pk")

    assert factory.addresses == []


@pytest.mark.asyncio
async def test_channel_factory_failure_is_create_client_error(discovery):
    def broken_factory(address):
        raise ValueError(f"bad target {address}")

    seo = SEOClient(discovery, "seo", channel_factory=broken_factory)

    with pytest.raises(CreateClientError) as exc_info:
        await seo.delete(SEO_ITEM, "pk")

    assert exc_info.value.address == "grpc://sso.internal:9000"
    assert isinstance(exc_info.value.cause, ValueError)


@pytest.mark.asyncio
async def test_call_carries_deadline_and_trace_context(discovery):
    factory = ChannelFactory(par_pro_pb2.SEOMsg(title="Tea"))
    seo = SEOClient(discovery, "seo", channel_factory=factory)
    request_context.set_deadline(15)
    tracer = TracerProvider().get_tracer("test")

    with tracer.start_as_current_span("items.createItem.handler") as span:
        await seo.create(SEO_ITEM, "0b8f", SEO(title="Tea"))

    call = factory.channels[0].calls[0]
    assert 0 < call["timeout"] <= 15
    trace_id = format(span.get_span_context().trace_id, "032x")
    assert call["metadata"]["traceparent"].split("-")[1] == trace_id


@pytest.mark.asyncio
async def test_seo_create_maps_record(discovery):
    factory = ChannelFactory(par_pro_pb2.SEOMsg(title="Tea", obj_name="item", obj_pk="0b8f"))
    seo = SEOClient(discovery, "seo", channel_factory=factory)

    stored = await seo.create(
        SEO_ITEM, "0b8f", SEO(title="Tea", keywords="tea,green", og_image="/og.png")
    )

    call = factory.channels[0].calls[0]
    assert call["method"] == "/par_pro.SEO/CreateSEO"
    sent = par_pro_pb2.SEOMsg.FromString(call["wire"])
    assert (sent.obj_name, sent.obj_pk) == ("item", "0b8f")
    assert sent.title == "Tea"
    assert sent.keywords == "tea,green"
    assert sent.og_image == "/og.png"
    assert (stored.obj_name, stored.obj_pk) == ("item", "0b8f")


@pytest.mark.asyncio
async def test_banner_update_wraps_banner_with_timestamps(discovery):
    factory = ChannelFactory(par_pro_pb2.BannerMsg(id=4, obj_name="category", obj_pk="teas"))
    banner_client = BannerClient(discovery, "etc", channel_factory=factory)
    created = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    slide = BannerSlide(id=1, title="Summer", src="/s.png", created_at=created, updated_at=created)
    banner = Banner(id=4, slides=[slide])

    stored = await banner_client.update(BANNER_CATEGORY, "teas", banner)

    call = factory.channels[0].calls[0]
    assert call["method"] == "/par_pro.Banner/UpdateBanner"
    sent = par_pro_pb2.CreateAndUpdateBannerReq.FromString(call["wire"])
    assert (sent.name, sent.pk) == ("category", "teas")
    assert sent.banner.id == 4
    assert sent.banner.obj_name == "category"
    assert sent.banner.slides[0].title == "Summer"
    assert sent.banner.slides[0].created_at.ToDatetime(tzinfo=timezone.utc) == created
    assert stored.id == 4


@pytest.mark.asyncio
async def test_delete_calls_decode_empty_replies(discovery):
    factory = ChannelFactory(empty_pb2.Empty(), empty_pb2.Empty())
    seo = SEOClient(discovery, "seo", channel_factory=factory)
    banner_client = BannerClient(discovery, "etc", channel_factory=factory)

    await seo.delete(SEO_ITEM, "0b8f")
    await banner_client.delete(BANNER_CATEGORY, "teas")

    methods = [c.calls[0]["method"] for c in factory.channels]
    assert methods == ["/par_pro.SEO/DeleteSEO", "/par_pro.Banner/DeleteBanner"]
    sent = par_pro_pb2.GetBannerReq.FromString(factory.channels[1].calls[0]["wire"])
    assert (sent.name, sent.pk) == ("category", "teas")


@pytest.mark.parametrize(
    "address, target",
    [
        ("sso.internal:9000", "sso.internal:9000"),
        ("http://sso.internal:9000", "sso.internal:9000"),
        ("grpc://sso.internal:9000/", "sso.internal:9000"),
    ],
)
def test_normalize_target(address, target):
    assert normalize_target(address) == target


@pytest.mark.asyncio
async def test_each_call_is_observed_with_grpc_status(discovery):
    factory = ChannelFactory(
        par_pro_pb2.BoolSSOMsg(bool=True),
        _rpc_error(grpc.StatusCode.PERMISSION_DENIED, "denied"),
    )
    identity = IdentityClient(discovery, "sso", channel_factory=factory)

    with patch("services.catalog.services.remote.observe_request") as observe:
        await identity.validate_token("valid")
        with pytest.raises(grpc.aio.AioRpcError):
            await identity.resolve_token("valid")
        discovery.find_service.side_effect = ServiceNotFoundError("sso")
        with pytest.raises(ServiceNotFoundError):
            await identity.validate_token("valid")

    assert [c.args[1:] for c in observe.call_args_list] == [
        (0, "sso.ValidateToken.adapter"),
        (7, "sso.GetUserByToken.adapter"),
        (5, "sso.ValidateToken.adapter"),
    ]
