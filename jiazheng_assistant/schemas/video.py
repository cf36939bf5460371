import math
from enum import Enum
from typing import List, Optional
from datetime import datetime

from pydantic import Field, field_validator

from jiazheng_assistant.schemas.common import CamelModel


# --- CLOSED CATEGORIES ---
class Platform(str, Enum):
    DOUYIN = "douyin"
    XIAOHONGSHU = "xiaohongshu"
    KUAISHOU = "kuaishou"
    SHIPINHAO = "shipinhao"
    BILIBILI = "bilibili"
    OTHER = "other"

class ServiceType(str, Enum):
    CLEANING = "cleaning"
    BABYSITTING = "babysitting"
    ELDERCARE = "eldercare"
    COOKING = "cooking"
    LAUNDRY = "laundry"
    OTHER = "other"

class TargetAge(str, Enum):
    YOUNG = "young"
    MIDDLE = "middle"
    SENIOR = "senior"
    ALL = "all"

class ServiceFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    OCCASIONAL = "occasional"


PLATFORM_NAMES = {
    Platform.DOUYIN: "抖音",
    Platform.XIAOHONGSHU: "小红书",
    Platform.KUAISHOU: "快手",
    Platform.SHIPINHAO: "视频号",
    Platform.BILIBILI: "B站",
    Platform.OTHER: "其他",
}

SERVICE_TYPE_NAMES = {
    ServiceType.CLEANING: "家居保洁",
    ServiceType.BABYSITTING: "月嫂育婴",
    ServiceType.ELDERCARE: "老人护理",
    ServiceType.COOKING: "烹饪服务",
    ServiceType.LAUNDRY: "洗衣熨烫",
    ServiceType.OTHER: "其他服务",
}


def platform_name(platform) -> str:
    try:
        return PLATFORM_NAMES[Platform(platform)]
    except ValueError:
        return str(platform)


# --- COERCION HELPERS ---
def _to_number(value) -> Optional[float]:
    """Returns a finite float or None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


# Largest value a BIGINT column holds
MAX_COUNT = 2 ** 63 - 1


def coerce_count(value) -> int:
    """Engagement counters: malformed or negative input becomes 0, huge input is capped."""
    if isinstance(value, int) and not isinstance(value, bool):
        number = value  # exact, no float round trip
    else:
        number = _to_number(value)
    if number is None or number < 0:
        return 0
    if number >= MAX_COUNT:
        return MAX_COUNT
    return int(number)


def coerce_optional(value, low: float = None, high: float = None) -> Optional[float]:
    """Optional numbers: malformed or out-of-range input is treated as not provided."""
    number = _to_number(value)
    if number is None:
        return None
    if low is not None and number < low:
        return None
    if high is not None and number > high:
        return None
    return number


def coerce_choice(enum_cls, value, fallback=None):
    if value is None:
        return None
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip().lower()
    if not key:
        return None
    try:
        return enum_cls(key)
    except ValueError:
        return fallback


# --- VIDEO SCHEMAS ---
class VideoBase(CamelModel):
    title: str = ""
    content: str = ""
    keywords: List[str] = Field(default_factory=list)

    views: int = 0
    likes: int = 0
    comments: int = 0
    shares: int = 0

    platform: Platform = Platform.OTHER
    service_type: Optional[ServiceType] = None
    target_age: Optional[TargetAge] = None
    service_frequency: Optional[ServiceFrequency] = None
    location: Optional[str] = None

    duration: Optional[int] = None # seconds
    price: Optional[float] = None
    customer_satisfaction: Optional[float] = None # 1-5
    completion_rate: Optional[float] = None # 0-100
    engagement_rate: Optional[float] = None # 0-100
    conversion_rate: Optional[float] = None # 0-100

    @field_validator("title", "content", mode="before")
    @classmethod
    def _text(cls, v):
        return "" if v is None else str(v)

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords(cls, v):
        if v is None:
            return []
        # Form input arrives as "保洁, 收纳, 家政阿姨"
        if isinstance(v, str):
            return [k.strip() for k in v.replace("，", ",").split(",") if k.strip()]
        if isinstance(v, (list, tuple, set)):
            return [str(k) for k in v if k is not None and str(k) != ""]
        return []

    @field_validator("views", "likes", "comments", "shares", mode="before")
    @classmethod
    def _counter(cls, v):
        return coerce_count(v)

    @field_validator("platform", mode="before")
    @classmethod
    def _platform(cls, v):
        return coerce_choice(Platform, v, Platform.OTHER) or Platform.OTHER

    @field_validator("service_type", mode="before")
    @classmethod
    def _service_type(cls, v):
        return coerce_choice(ServiceType, v, ServiceType.OTHER)

    @field_validator("target_age", mode="before")
    @classmethod
    def _target_age(cls, v):
        return coerce_choice(TargetAge, v)

    @field_validator("service_frequency", mode="before")
    @classmethod
    def _frequency(cls, v):
        return coerce_choice(ServiceFrequency, v)

    @field_validator("location", mode="before")
    @classmethod
    def _location(cls, v):
        if v is None:
            return None
        return str(v).strip() or None

    @field_validator("duration", mode="before")
    @classmethod
    def _duration(cls, v):
        number = coerce_optional(v, low=0)
        return int(number) if number is not None else None

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, v):
        return coerce_optional(v, low=0)

    @field_validator("customer_satisfaction", mode="before")
    @classmethod
    def _satisfaction(cls, v):
        return coerce_optional(v, low=1, high=5)

    @field_validator("completion_rate", "engagement_rate", "conversion_rate", mode="before")
    @classmethod
    def _rate(cls, v):
        return coerce_optional(v, low=0, high=100)


# Schema for CREATING and for full-field REPLACEMENT
class VideoCreate(VideoBase):
    pass

# A record as handed to the aggregator (may come straight from a request body)
class VideoData(VideoBase):
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, v):
        return None if v is None else str(v)

    @field_validator("created_at", mode="before")
    @classmethod
    def _created_at(cls, v):
        if v is None or isinstance(v, datetime):
            return v
        if isinstance(v, str):
            try:
                return datetime.fromisoformat(v.strip().replace("Z", "+00:00"))
            except ValueError:
                return None
        return None

# Schema for READING (Response to Frontend)
class VideoResponse(VideoData):
    id: str
    created_at: datetime
