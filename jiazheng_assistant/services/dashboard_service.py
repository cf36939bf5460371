from collections import Counter
from typing import List

from sqlalchemy.orm import Session

from jiazheng_assistant.schemas.video import VideoData, platform_name
from jiazheng_assistant.schemas.stats import (
    ChartResponse,
    ComprehensiveMetrics,
    KeywordCount,
    KpiResponse,
    PlatformSlice,
    TopVideoPoint,
)
from jiazheng_assistant.services.stats_service import StatsAggregator
from jiazheng_assistant.services.video_service import VideoService

CHART_LIMIT = 10
TITLE_MAX = 20
KEYWORD_MAX = 15


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + "..." if len(text) > limit else text


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.aggregator = StatsAggregator()

    def _videos(self) -> List[VideoData]:
        return VideoService(self.db).list_videos()

    # --- KPI CARDS ---

    def get_kpis(self) -> KpiResponse:
        videos = self._videos()
        metrics = self.aggregator.comprehensive_metrics(videos)

        return KpiResponse(
            total_videos=len(videos),
            engagement_rate=round(metrics.engagement_rate, 2),
            summary=self.aggregator.summary(videos),
            top_video=self.aggregator.best_record(videos),
            platform_distribution=self.aggregator.platform_distribution(videos),
        )

    # --- CHARTS ---

    def get_charts(self) -> ChartResponse:
        videos = self._videos()

        platform_data = [
            PlatformSlice(name=platform_name(p), value=count, platform=p)
            for p, count in self.aggregator.platform_distribution(videos).items()
        ]

        # sorted() is stable, equal views keep insertion order
        top_videos = [
            TopVideoPoint(
                title=_truncate(v.title, TITLE_MAX),
                views=v.views,
                likes=v.likes,
                comments=v.comments,
                shares=v.shares,
            )
            for v in sorted(videos, key=lambda v: v.views, reverse=True)[:CHART_LIMIT]
        ]

        # Display ranking: trimmed and lower-cased, unlike the raw keyword stats
        freq = Counter()
        for v in videos:
            for keyword in v.keywords:
                normalized = keyword.strip().lower()
                if normalized:
                    freq[normalized] += 1

        top_keywords = [
            KeywordCount(keyword=_truncate(k, KEYWORD_MAX), count=c)
            for k, c in freq.most_common(CHART_LIMIT)
        ]

        return ChartResponse(platform_data=platform_data, top_videos=top_videos, top_keywords=top_keywords)

    # --- COMPREHENSIVE VIEW ---

    def get_comprehensive(self) -> ComprehensiveMetrics:
        return self.aggregator.comprehensive_metrics(self._videos())
