"""
Where: services/catalog/services/seo.py
What: Client for the SEO service.
Why: SEO records of items, categories and promotions live in a sibling service.
"""

from ..models import SEO
from ..pb import par_pro_pb2, par_pro_pb2_grpc
from .remote import RemoteServiceClient

# Object names the SEO service keys records by.
SEO_ITEM = "item"
SEO_CATEGORY = "category"
SEO_PROMO = "promo"


def seo_to_proto(name: str, pk: str, seo: SEO):
    return par_pro_pb2.SEOMsg(
        title=seo.title,
        description=seo.description,
        keywords=seo.keywords,
        og_title=seo.og_title,
        og_description=seo.og_description,
        og_image=seo.og_image,
        obj_name=name,
        obj_pk=pk,
    )


class SEOClient(RemoteServiceClient):
    stub_class = par_pro_pb2_grpc.SEOStub

    async def create(self, name: str, pk: str, seo: SEO):
        """Returns the SEOMsg stored by the SEO service."""
        return await self._invoke("seo.CreateSEO.adapter", "CreateSEO", seo_to_proto(name, pk, seo))

    async def update(self, name: str, pk: str, seo: SEO):
        return await self._invoke("seo.UpdateSEO.adapter", "UpdateSEO", seo_to_proto(name, pk, seo))

    async def delete(self, name: str, pk: str) -> None:
        await self._invoke(
            "seo.DeleteSEO.adapter", "DeleteSEO", par_pro_pb2.GetSEOReq(name=name, pk=pk)
        )
