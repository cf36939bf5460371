import logging
from datetime import datetime
from typing import List, Protocol

from jiazheng_assistant.schemas.hotspot import (
    HotTopic,
    HotspotData,
    IndustryMetrics,
    PopularService,
    RegionalDemand,
    Timeframe,
)

logger = logging.getLogger(__name__)


class HotspotProvider(Protocol):
    """Source of industry hot topics; swap in a news/API-backed one later."""

    def get_hot_topics(self, timeframe: str) -> List[HotTopic]:
        ...

    def get_industry_metrics(self) -> IndustryMetrics:
        ...


# id, title, description, category, trend, engagement, source
_TOPICS = {
    Timeframe.TODAY: [
        ("1", "春节期间家政服务需求激增，预订量同比增长300%",
         "随着春节临近，深度清洁、年夜饭制作等服务需求大幅增长",
         "cleaning", "rising", 8500, "家政行业报告"),
        ("2", "智能家政设备市场突破，AI辅助服务成新趋势",
         "扫地机器人、智能清洁工具等设备与传统家政服务结合",
         "general", "hot", 12300, "科技资讯"),
        ("3", "月嫂服务价格上涨20%，高端育婴师供不应求",
         "专业月嫂和育婴师需求持续增长，服务价格稳步上升",
         "babysitting", "rising", 6800, "母婴行业周刊"),
    ],
    Timeframe.WEEK: [
        ("4", "居家养老服务成热门赛道，专业护理员缺口达50万",
         "老龄化社会推动居家养老服务快速发展，专业人才紧缺",
         "eldercare", "hot", 15600, "养老产业观察"),
        ("5", "家政O2O平台融资热潮，头部企业估值突破百亿",
         "多家家政平台完成新一轮融资，行业整合加速",
         "general", "stable", 9200, "投资界"),
        ("6", "绿色清洁产品需求增长，环保家政服务受青睐",
         "消费者环保意识提升，无毒清洁产品和服务成为新宠",
         "cleaning", "rising", 7400, "环保资讯"),
    ],
    Timeframe.MONTH: [
        ("7", "家政行业标准化进程加速，服务质量认证体系完善",
         "国家推出家政服务标准化指导意见，行业规范化发展",
         "general", "stable", 18900, "政策解读"),
        ("8", "95后成为家政服务主力消费群体，线上预订占比超70%",
         "年轻消费者偏好便捷的线上预订方式，推动行业数字化转型",
         "general", "hot", 22100, "消费趋势报告"),
        ("9", "家政服务员职业技能培训体系升级，专业化水平提升",
         "政府加大培训投入，家政服务员技能水平和收入待遇双提升",
         "general", "rising", 13500, "职业教育网"),
    ],
}

_POPULAR_SERVICES = [
    ("家居保洁", 64.8),
    ("月嫂育婴", 23.5),
    ("老人护理", 18.7),
    ("烹饪服务", 12.3),
    ("洗衣熨烫", 8.9),
]

_REGIONAL_DATA = [
    ("北京", 95, 78),
    ("上海", 92, 85),
    ("广州", 88, 82),
    ("深圳", 90, 75),
    ("杭州", 85, 80),
]


class StaticHotspotProvider:
    """Curated topics and industry figures shipped with the app."""

    def get_hot_topics(self, timeframe: str) -> List[HotTopic]:
        try:
            key = Timeframe(timeframe)
        except ValueError:
            return []

        now = datetime.utcnow()
        return [
            HotTopic(
                id=topic_id,
                title=title,
                description=description,
                category=category,
                trend=trend,
                engagement=engagement,
                timeframe=key,
                source=source,
                created_at=now,
            )
            for topic_id, title, description, category, trend, engagement, source in _TOPICS[key]
        ]

    def get_industry_metrics(self) -> IndustryMetrics:
        return IndustryMetrics(
            market_size=10149,
            growth_rate=15.2,
            user_penetration=93.8,
            avg_service_price=120,
            popular_services=[PopularService(name=n, percentage=p) for n, p in _POPULAR_SERVICES],
            regional_data=[RegionalDemand(region=r, demand=d, supply=s) for r, d, s in _REGIONAL_DATA],
        )


class HotspotService:
    def __init__(self, provider: HotspotProvider = None):
        self.provider = provider or StaticHotspotProvider()

    def get_hotspots(self, timeframe: str = Timeframe.TODAY.value) -> HotspotData:
        # An empty ?timeframe= means the default view
        timeframe = timeframe or Timeframe.TODAY.value
        topics = self.provider.get_hot_topics(timeframe)
        logger.info(f"🔥 Serving {len(topics)} hot topics for timeframe={timeframe}")
        return HotspotData(
            hot_topics=topics,
            industry_metrics=self.provider.get_industry_metrics(),
            last_updated=datetime.utcnow(),
        )
