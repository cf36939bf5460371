import logging
import random
import string
import time
from typing import List, Protocol

from jiazheng_assistant.core.config import settings
from jiazheng_assistant.core.exceptions import PaymentError
from jiazheng_assistant.schemas.payment import NotifyAck, PaymentPlan, PaymentRequest, PaymentResponse

logger = logging.getLogger(__name__)

PLANS = [
    PaymentPlan(plan_type="monthly", amount=199, description="月度版", period="月"),
    PaymentPlan(plan_type="quarterly", amount=499, description="季度版", period="3个月"),
    PaymentPlan(plan_type="yearly", amount=1999, description="年度版", period="年"),
]

_ALPHABET = string.ascii_lowercase + string.digits


def _random_token(length: int) -> str:
    return "".join(random.choices(_ALPHABET, k=length))


class PaymentGateway(Protocol):
    """Unified-order side of a payment provider."""

    def create_order(self, request: PaymentRequest, client_ip: str) -> PaymentResponse:
        ...

    def handle_notify(self, body: str) -> NotifyAck:
        ...


class MockWeChatPayGateway:
    """
    Builds the NATIVE unified-order parameters and answers with mock
    prepay data. Nothing is signed, sent or persisted.
    """

    def __init__(self):
        self.appid = settings.WECHAT_APPID
        self.mch_id = settings.WECHAT_MCH_ID
        self.notify_url = settings.NOTIFY_URL

    def create_order(self, request: PaymentRequest, client_ip: str = "127.0.0.1") -> PaymentResponse:
        out_trade_no = f"ORDER_{int(time.time() * 1000)}_{_random_token(9)}"

        params = {
            "appid": self.appid,
            "mch_id": self.mch_id,
            "nonce_str": _random_token(15),
            "body": request.description,
            "out_trade_no": out_trade_no,
            "total_fee": int(round(request.amount * 100)), # fen
            "spbill_create_ip": client_ip or "127.0.0.1",
            "notify_url": self.notify_url,
            "trade_type": "NATIVE",
        }
        logger.info(f"💳 WeChat Pay unified order: {params}")

        return PaymentResponse(
            appId=self.appid,
            timeStamp=str(int(time.time())),
            nonceStr=params["nonce_str"],
            package=f"prepay_id=wx{_random_token(15)}",
            signType="MD5",
            paySign=f"mock_signature_{_random_token(15)}",
            code_url=(
                "https://api.qrserver.com/v1/create-qr-code/?size=200x200"
                f"&data=weixin://wxpay/bizpayurl?pr={_random_token(15)}"
            ),
            out_trade_no=out_trade_no,
        )

    def handle_notify(self, body: str) -> NotifyAck:
        # TODO: parse the XML body and verify its signature with WECHAT_API_KEY before trusting it
        logger.info(f"📩 WeChat Pay notify: {body}")
        return NotifyAck(return_code="SUCCESS", return_msg="OK")


class PaymentService:
    def __init__(self, gateway: PaymentGateway = None):
        self.gateway = gateway or MockWeChatPayGateway()

    def list_plans(self) -> List[PaymentPlan]:
        return PLANS

    def create_order(self, request: PaymentRequest, client_ip: str = "127.0.0.1") -> PaymentResponse:
        if not request.plan_type or not request.amount or not request.description:
            raise PaymentError("缺少必要参数")
        return self.gateway.create_order(request, client_ip)

    def handle_notify(self, body: str) -> NotifyAck:
        return self.gateway.handle_notify(body)
