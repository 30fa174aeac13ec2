"""
Order routes. Orders are addressed by a decimal uint64 id.
"""

from fastapi import APIRouter, Request, status

from ...config import config
from ...core.exceptions import INTERNAL_ERROR_MESSAGE, BadRequestError
from ...core.pagination import parse_page_params
from ...core.validation import validate_order
from ...models import Order
from ..deps import ControllerDep, IdentityDep, UidDep, bearer_token, parse_caller
from ..handler import instrumented, parse_order_id, read_body

router = APIRouter(prefix="/api", tags=["orders"])


@router.get("/orders/user")
@instrumented("orders.listUserOrders.handler")
async def list_user_orders(request: Request, uid: UidDep, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_user_orders(uid, params.page, params.size)


@router.get("/orders")
@instrumented("orders.listOrders.handler")
async def list_orders(request: Request, uid: UidDep, ctrl: ControllerDep):
    params = parse_page_params(request.query_params, config.DEFAULT_PAGE_SIZE)
    return await ctrl.list_orders(params.page, params.size, params.filters, params.sort)


@router.post("/order")
@instrumented("orders.createOrder.handler", status.HTTP_201_CREATED)
async def create_order(
    request: Request, uid: UidDep, identity: IdentityDep, ctrl: ControllerDep
):
    user_id = await identity.resolve_token(bearer_token(request))
    if not user_id:
        # Guest orders are not accepted.
        raise BadRequestError(INTERNAL_ERROR_MESSAGE)
    caller = parse_caller(user_id)

    order = await read_body(request, Order)
    validate_order(order)
    return await ctrl.create_order(caller, order)


@router.get("/order/{order_id}")
@instrumented("orders.getOrder.handler")
async def get_order(order_id: str, uid: UidDep, ctrl: ControllerDep):
    return await ctrl.get_order(parse_order_id(order_id))


@router.put("/order/{order_id}")
@instrumented("orders.updateOrder.handler")
async def update_order(order_id: str, request: Request, uid: UidDep, ctrl: ControllerDep):
    oid = parse_order_id(order_id)
    order = await read_body(request, Order)
    validate_order(order)
    await ctrl.update_order(oid, order)
    return "OK"


@router.delete("/order/{order_id}")
@instrumented("orders.cancelOrder.handler", status.HTTP_204_NO_CONTENT)
async def cancel_order(order_id: str, uid: UidDep, ctrl: ControllerDep):
    await ctrl.cancel_order(parse_order_id(order_id))
    return "OK"
