"""
Favorite routes. The owner always comes from the authenticated caller,
never from the body.
"""

import uuid

from fastapi import APIRouter, Request, status

from ...core.exceptions import MissingUUIDError
from ...models import Favorite
from ..deps import ControllerDep, UidDep
from ..handler import instrumented, read_body

router = APIRouter(prefix="/api", tags=["favorites"])

_NIL_UUID = uuid.UUID(int=0)


async def _read_item_id(request: Request) -> uuid.UUID:
    body = await read_body(request, Favorite)
    if body.item_id == _NIL_UUID:
        raise MissingUUIDError()
    return body.item_id


@router.get("/favorite")
@instrumented("favorites.listFavorites.handler")
async def list_favorites(uid: UidDep, ctrl: ControllerDep):
    return await ctrl.list_favorites(uid)


@router.post("/favorite")
@instrumented("favorites.addToFavorites.handler", status.HTTP_201_CREATED)
async def add_to_favorites(request: Request, uid: UidDep, ctrl: ControllerDep):
    item_id = await _read_item_id(request)
    return await ctrl.add_to_favorites(uid, item_id)


@router.delete("/favorite")
@instrumented("favorites.removeFromFavorites.handler", status.HTTP_204_NO_CONTENT)
async def remove_from_favorites(request: Request, uid: UidDep, ctrl: ControllerDep):
    item_id = await _read_item_id(request)
    await ctrl.remove_from_favorites(uid, item_id)
    return "OK"
