import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request

from jiazheng_assistant.core.exceptions import PaymentError
from jiazheng_assistant.schemas.payment import NotifyAck, PaymentPlan, PaymentRequest, PaymentResponse
from jiazheng_assistant.services.payment_service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/wechat-pay", tags=["WeChat Pay"])


@router.get("/plans", response_model=List[PaymentPlan])
def list_plans():
    return PaymentService().list_plans()


# --- UNIFIED ORDER (mock) ---
@router.post("", response_model=PaymentResponse)
def create_order(payload: PaymentRequest, request: Request):
    client_ip = request.client.host if request.client else "127.0.0.1"
    try:
        return PaymentService().create_order(payload, client_ip)
    except PaymentError as e:
        raise HTTPException(status_code=400, detail=str(e))


# --- PAYMENT RESULT CALLBACK ---
@router.post("/notify", response_model=NotifyAck)
async def payment_notify(request: Request):
    try:
        body = (await request.body()).decode("utf-8")
        return PaymentService().handle_notify(body)
    except Exception as e:
        logger.error(f"❌ WeChat Pay notify failed: {e}")
        return NotifyAck(return_code="FAIL", return_msg="处理失败")
