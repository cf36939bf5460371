from typing import Optional

from pydantic import BaseModel

from jiazheng_assistant.schemas.common import CamelModel


class PaymentPlan(CamelModel):
    plan_type: str
    amount: int # CNY
    description: str
    period: str

class PaymentRequest(CamelModel):
    plan_type: Optional[str] = None
    amount: Optional[float] = None
    description: Optional[str] = None


# Field names follow the WeChat Pay JSAPI / NATIVE parameter names as-is
class PaymentResponse(BaseModel):
    appId: str
    timeStamp: str
    nonceStr: str
    package: str
    signType: str
    paySign: str
    code_url: str
    out_trade_no: str

class NotifyAck(BaseModel):
    return_code: str # SUCCESS | FAIL
    return_msg: str
