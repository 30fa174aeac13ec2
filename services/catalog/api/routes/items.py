"""
Item routes.

Fixed paths (search, attr search) are registered before `/item/{uid}`.
"""

from fastapi import APIRouter, Request, status

from ...config import config
from ...core.pagination import is_searchable, parse_page_params
from ...core.validation import validate_item
from ...models import Item
from ..deps import ControllerDep, UidDep
from ..handler import instrumented, parse_uuid, read_body

router = APIRouter(prefix="/api", tags=["items"])


@router.get("/item/search")
@instrumented("items.itemSearch.handler")
async def item_search(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.SEARCH_PAGE_SIZE)
    if not is_searchable(params.query, config.MIN_SEARCH_QUERY_LENGTH):
        return []
    return await ctrl.item_search(params.query, params.page, params.size)


@router.get("/item/attr/search")
@instrumented("items.itemAttrSearch.handler")
async def item_attr_search(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.SEARCH_PAGE_SIZE)
    if not is_searchable(params.query, config.MIN_SEARCH_QUERY_LENGTH):
        return []
    return await ctrl.item_attr_search(params.query, params.page, params.size)


@router.get("/hits")
@instrumented("items.hitItems.handler")
async def hit_items(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_items_by_label("hit", params.page, params.size)


@router.get("/recs")
@instrumented("items.recItems.handler")
async def rec_items(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_items_by_label("rec", params.page, params.size)


@router.get("/item")
@instrumented("items.listItems.handler")
async def list_items(request: Request, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_items(params.page, params.size)


@router.post("/item")
@instrumented("items.createItem.handler", status.HTTP_201_CREATED)
async def create_item(request: Request, uid: UidDep, ctrl: ControllerDep):
    item = await read_body(request, Item)
    validate_item(item)
    created = await ctrl.create_item(item)
    return created.id


@router.get("/item/{uid}/related")
@instrumented("items.listRelatedItems.handler")
async def list_related_items(uid: str, ctrl: ControllerDep):
    return await ctrl.list_related_items(parse_uuid(uid))


@router.get("/item/{uid}")
@instrumented("items.getItem.handler")
async def get_item(uid: str, ctrl: ControllerDep):
    return await ctrl.get_item(parse_uuid(uid))


@router.put("/item/{uid}")
@instrumented("items.updateItem.handler")
async def update_item(uid: str, request: Request, caller: UidDep, ctrl: ControllerDep):
    item_id = parse_uuid(uid)
    item = await read_body(request, Item)
    validate_item(item)
    await ctrl.update_item(item_id, item)
    return "OK"


@router.delete("/item/{uid}")
@instrumented("items.deleteItem.handler", status.HTTP_204_NO_CONTENT)
async def delete_item(uid: str, caller: UidDep, ctrl: ControllerDep):
    await ctrl.delete_item(parse_uuid(uid))
    return "OK"
