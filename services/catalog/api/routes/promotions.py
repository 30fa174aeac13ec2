"""
Promotion routes. Promotions are addressed by slug.
"""

from fastapi import APIRouter, Request, status

from ...config import config
from ...core.pagination import is_searchable, parse_page_params
from ...core.validation import validate_promotion
from ...models import Promotion
from ..deps import ControllerDep, UidDep
from ..handler import instrumented, read_body

router = APIRouter(prefix="/api", tags=["promotions"])


@router.get("/promotions/search")
@instrumented("promo.promotionSearch.handler")
async def promotion_search(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.SEARCH_PAGE_SIZE)
    if not is_searchable(params.query, config.MIN_SEARCH_QUERY_LENGTH):
        return []
    return await ctrl.promotion_search(params.query, params.page, params.size)


@router.get("/promotions/items/{slug}")
@instrumented("promo.listPromotionItems.handler")
async def list_promotion_items(slug: str, request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_promotion_items(slug, params.page, params.size)


@router.get("/promotions")
@instrumented("promo.listPromotions.handler")
async def list_promotions(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_promotions(params.page, params.size)


@router.post("/promotions")
@instrumented("promo.createPromotion.handler", status.HTTP_201_CREATED)
async def create_promotion(request: Request, caller: UidDep, ctrl: ControllerDep):
    promotion = await read_body(request, Promotion)
    validate_promotion(promotion)
    created = await ctrl.create_promotion(promotion)
    return created.slug


@router.get("/promotions/{slug}")
@instrumented("promo.getPromotion.handler")
async def get_promotion(slug: str, ctrl: ControllerDep):
    return await ctrl.get_promotion(slug)


@router.put("/promotions/{slug}")
@instrumented("promo.updatePromotion.handler")
async def update_promotion(slug: str, request: Request, caller: UidDep, ctrl: ControllerDep):
    promotion = await read_body(request, Promotion)
    validate_promotion(promotion)
    await ctrl.update_promotion(slug, promotion)
    return "OK"


@router.delete("/promotions/{slug}")
@instrumented("promo.deletePromotion.handler", status.HTTP_204_NO_CONTENT)
async def delete_promotion(slug: str, caller: UidDep, ctrl: ControllerDep):
    await ctrl.delete_promotion(slug)
    return "OK"
