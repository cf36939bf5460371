from datetime import datetime
from enum import Enum
from typing import List

from jiazheng_assistant.schemas.common import CamelModel


class Timeframe(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


class HotTopic(CamelModel):
    id: str
    title: str
    description: str
    category: str # cleaning, babysitting, eldercare, general
    trend: str # rising, hot, stable, falling
    engagement: int
    timeframe: Timeframe
    source: str
    created_at: datetime

class PopularService(CamelModel):
    name: str
    percentage: float

class RegionalDemand(CamelModel):
    region: str
    demand: int
    supply: int

class IndustryMetrics(CamelModel):
    market_size: float # 亿元
    growth_rate: float # %
    user_penetration: float # %
    avg_service_price: float # 元/小时
    popular_services: List[PopularService]
    regional_data: List[RegionalDemand]


class HotspotData(CamelModel):
    hot_topics: List[HotTopic]
    industry_metrics: IndustryMetrics
    last_updated: datetime

class HotspotResponse(CamelModel):
    success: bool = True
    data: HotspotData
