"""
Where: services/catalog/services/banner.py
What: Client for the banner service (registered as "etc").
Why: Category and promotion banners live in a sibling service.
"""

from typing import List

from google.protobuf.timestamp_pb2 import Timestamp

from ..models import Banner, BannerSlide
from ..pb import par_pro_pb2, par_pro_pb2_grpc
from .remote import RemoteServiceClient

BANNER_CATEGORY = "category"
BANNER_PROMO = "promo"


def _timestamp(value) -> Timestamp:
    ts = Timestamp()
    ts.FromDatetime(value)
    return ts


def slides_to_proto(slides: List[BannerSlide]) -> list:
    return [
        par_pro_pb2.SlideMsg(
            id=slide.id,
            title=slide.title,
            description=slide.description,
            src=slide.src,
            alt=slide.alt,
            button_text=slide.button_text,
            button_href=slide.button_href,
            banner_id=slide.banner_id,
            created_at=_timestamp(slide.created_at),
            updated_at=_timestamp(slide.updated_at),
        )
        for slide in slides
    ]


class BannerClient(RemoteServiceClient):
    stub_class = par_pro_pb2_grpc.BannerStub

    async def create(self, name: str, pk: str, banner: Banner):
        """Returns the BannerMsg stored by the banner service."""
        request = par_pro_pb2.BannerMsg(
            obj_name=name, obj_pk=pk, slides=slides_to_proto(banner.slides)
        )
        return await self._invoke("banner.CreateBanner.adapter", "CreateBanner", request)

    async def update(self, name: str, pk: str, banner: Banner):
        request = par_pro_pb2.CreateAndUpdateBannerReq(
            name=name,
            pk=pk,
            banner=par_pro_pb2.BannerMsg(
                id=banner.id,
                obj_name=banner.obj_name or name,
                obj_pk=banner.obj_pk or pk,
                slides=slides_to_proto(banner.slides),
            ),
        )
        return await self._invoke("banner.UpdateBanner.adapter", "UpdateBanner", request)

    async def delete(self, name: str, pk: str) -> None:
        await self._invoke(
            "banner.DeleteBanner.adapter", "DeleteBanner", par_pro_pb2.GetBannerReq(name=name, pk=pk)
        )
