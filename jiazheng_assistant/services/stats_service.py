"""
Statistics over a creator's video records.

Pure data transformation: every method reads its input and returns a fresh
result, so one aggregator can be shared across requests.
"""

import math
import re
from collections import Counter
from typing import Iterable, List, Mapping, Optional

from jiazheng_assistant.schemas.video import VideoData
from jiazheng_assistant.schemas.stats import (
    AggregateStats,
    ComprehensiveMetrics,
    KeywordCount,
    LengthPreference,
    StyleSignals,
    VideoStatsSummary,
)

TOP_KEYWORDS = 5

# Generation-length guidance when a creator has no titles/bodies yet
DEFAULT_TITLE_LENGTH = 25
DEFAULT_CONTENT_LENGTH = 150
# Never recommend shorter than this
MIN_TITLE_LENGTH = 15
MIN_CONTENT_LENGTH = 100

EMOJI_RE = re.compile("[\U0001F000-\U0001FFFF\u2600-\u27BF]")
EXCLAMATION_MARKS = ("！", "!")
QUESTION_MARKS = ("？", "?")
STRUCTURE_MARKS = ("：", ":", "、")
DIALOGUE_MARKS = ('"', "“", "”")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percent(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return part * 100 / whole


def _mean(values: List[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


class StatsAggregator:
    """
    Reduces a list of video records into summary statistics.

    Usage:
        stats = StatsAggregator().aggregate(videos)
        stats.total_views, stats.like_rate, stats.best_record ...
    """

    def normalize(self, records: Optional[Iterable]) -> List[VideoData]:
        """Accepts VideoData or plain dicts; dicts go through the same coercion as the API."""
        videos = []
        for record in records or []:
            if isinstance(record, VideoData):
                videos.append(record)
            elif isinstance(record, Mapping):
                videos.append(VideoData.model_validate(dict(record)))
        return videos

    # --- TOTALS ---

    def summary(self, records) -> VideoStatsSummary:
        videos = self.normalize(records)
        count = len(videos)

        total_views = sum(v.views for v in videos)
        total_likes = sum(v.likes for v in videos)
        total_comments = sum(v.comments for v in videos)
        total_shares = sum(v.shares for v in videos)

        if count == 0:
            return VideoStatsSummary()

        return VideoStatsSummary(
            total_views=total_views,
            total_likes=total_likes,
            total_comments=total_comments,
            total_shares=total_shares,
            average_views=round_half_up(total_views / count),
            average_likes=round_half_up(total_likes / count),
            average_comments=round_half_up(total_comments / count),
            average_shares=round_half_up(total_shares / count),
        )

    # --- RANKINGS ---

    def top_keywords(self, records, limit: int = TOP_KEYWORDS) -> List[KeywordCount]:
        """Case-sensitive frequency ranking; equal counts keep first-seen order."""
        videos = self.normalize(records)
        freq = Counter(k for v in videos for k in v.keywords)
        return [KeywordCount(keyword=k, count=c) for k, c in freq.most_common(limit)]

    def platform_distribution(self, records) -> dict:
        distribution = {}
        for v in self.normalize(records):
            key = v.platform.value
            distribution[key] = distribution.get(key, 0) + 1
        return distribution

    def best_record(self, records) -> Optional[VideoData]:
        best = None
        for v in self.normalize(records):
            if best is None or v.views > best.views:
                best = v
        return best

    # --- STYLE ---

    def style_signals(self, records) -> StyleSignals:
        videos = self.normalize(records)
        titles = [v.title for v in videos if v.title]
        contents = [v.content for v in videos if v.content]

        avg_title = round_half_up(_mean([len(t) for t in titles])) if titles else 0
        avg_content = round_half_up(_mean([len(c) for c in contents])) if contents else 0

        return StyleSignals(
            avg_title_length=avg_title,
            avg_content_length=avg_content,
            has_emoji=any(EMOJI_RE.search(t) for t in titles),
            has_exclamation=any(m in t for t in titles for m in EXCLAMATION_MARKS),
            has_question=any(m in t for t in titles for m in QUESTION_MARKS),
            has_structured_content=any(m in c for c in contents for m in STRUCTURE_MARKS),
            has_dialogue=any(m in c for c in contents for m in DIALOGUE_MARKS),
        )

    def length_preference(self, records) -> LengthPreference:
        videos = self.normalize(records)
        titles = [v.title for v in videos if v.title]
        contents = [v.content for v in videos if v.content]

        title_len = round_half_up(_mean([len(t) for t in titles])) if titles else DEFAULT_TITLE_LENGTH
        content_len = round_half_up(_mean([len(c) for c in contents])) if contents else DEFAULT_CONTENT_LENGTH

        return LengthPreference(
            title_length=max(title_len, MIN_TITLE_LENGTH),
            content_length=max(content_len, MIN_CONTENT_LENGTH),
        )

    # --- MAIN ---

    def aggregate(self, records) -> AggregateStats:
        videos = self.normalize(records)
        summary = self.summary(videos)

        return AggregateStats(
            **summary.model_dump(),
            video_count=len(videos),
            like_rate=_percent(summary.total_likes, summary.total_views),
            comment_rate=_percent(summary.total_comments, summary.total_views),
            share_rate=_percent(summary.total_shares, summary.total_views),
            top_keywords=self.top_keywords(videos),
            platform_distribution=self.platform_distribution(videos),
            best_record=self.best_record(videos),
            style=self.style_signals(videos),
            length_preference=self.length_preference(videos),
        )

    def comprehensive_metrics(self, records) -> ComprehensiveMetrics:
        """Dashboard metrics, each optional field averaged only over records that carry it."""
        videos = self.normalize(records)
        summary = self.summary(videos)

        def avg_of(field: str) -> float:
            return _mean([getattr(v, field) for v in videos if getattr(v, field) is not None])

        interactions = summary.total_likes + summary.total_comments + summary.total_shares

        return ComprehensiveMetrics(
            total_videos=len(videos),
            total_views=summary.total_views,
            total_likes=summary.total_likes,
            total_comments=summary.total_comments,
            total_shares=summary.total_shares,
            avg_engagement=avg_of("engagement_rate"),
            avg_conversion=avg_of("conversion_rate"),
            avg_satisfaction=avg_of("customer_satisfaction"),
            avg_price=avg_of("price"),
            avg_duration=avg_of("duration"),
            avg_completion=avg_of("completion_rate"),
            engagement_rate=_percent(interactions, summary.total_views),
        )
