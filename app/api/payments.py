from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from app.api.schemas import CreateOrderRequestSchema, CreateOrderResponseSchema
from app.application.exceptions import InitiationFailed
from app.application.use_cases.payment_order import PaymentOrderUseCase
from app.core.config import settings
from app.wiring.dependencies import get_payment_order_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create-order", response_model=CreateOrderResponseSchema)
def create_order(
    req: CreateOrderRequestSchema,
    uc: PaymentOrderUseCase = Depends(get_payment_order_use_case),
):
    try:
        initiation = uc.initiate(req.name, req.mobile_number, req.amount)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except InitiationFailed as e:
        raise HTTPException(status_code=502, detail=str(e))

    return CreateOrderResponseSchema(url=initiation.redirect_url, order_id=initiation.order_id)


@router.api_route("/status", methods=["GET", "POST"])
def check_status(
    order_id: str = Query(..., alias="id", min_length=1),
    uc: PaymentOrderUseCase = Depends(get_payment_order_use_case),
) -> RedirectResponse:
    try:
        decision = uc.reconcile(order_id)
    except Exception as e:
        logger.exception("Unexpected error reconciling payment", extra={"order_id": order_id, "error": str(e)})
        return RedirectResponse(settings.PHONEPE_FAILURE_URL, status_code=302)
    return RedirectResponse(decision.redirect_url, status_code=302)
