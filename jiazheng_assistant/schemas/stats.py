from typing import Dict, List, Optional

from pydantic import Field

from jiazheng_assistant.schemas.common import CamelModel
from jiazheng_assistant.schemas.video import VideoData


# --- BUILDING BLOCKS ---
class KeywordCount(CamelModel):
    keyword: str
    count: int

class StyleSignals(CamelModel):
    avg_title_length: int = 0 # 0 = no titles to measure
    avg_content_length: int = 0
    has_emoji: bool = False
    has_exclamation: bool = False
    has_question: bool = False
    has_structured_content: bool = False
    has_dialogue: bool = False

class LengthPreference(CamelModel):
    title_length: int
    content_length: int


# --- AGGREGATES ---
class VideoStatsSummary(CamelModel):
    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0
    total_shares: int = 0
    average_views: int = 0
    average_likes: int = 0
    average_comments: int = 0
    average_shares: int = 0

class AggregateStats(VideoStatsSummary):
    video_count: int = 0

    # Percentages, 0 when there are no views
    like_rate: float = 0.0
    comment_rate: float = 0.0
    share_rate: float = 0.0

    top_keywords: List[KeywordCount] = Field(default_factory=list)
    platform_distribution: Dict[str, int] = Field(default_factory=dict)
    best_record: Optional[VideoData] = None

    style: StyleSignals = Field(default_factory=StyleSignals)
    length_preference: LengthPreference

class ComprehensiveMetrics(CamelModel):
    total_videos: int = 0
    total_views: int = 0
    total_likes: int = 0
    total_comments: int = 0
    total_shares: int = 0
    # Averages over the records that carry each field
    avg_engagement: float = 0.0
    avg_conversion: float = 0.0
    avg_satisfaction: float = 0.0
    avg_price: float = 0.0
    avg_duration: float = 0.0
    avg_completion: float = 0.0
    # (likes + comments + shares) / views
    engagement_rate: float = 0.0


# --- DASHBOARD ---
class PlatformSlice(CamelModel):
    name: str # display name, e.g. "抖音"
    value: int
    platform: str

class TopVideoPoint(CamelModel):
    title: str
    views: int
    likes: int
    comments: int
    shares: int

class ChartResponse(CamelModel):
    platform_data: List[PlatformSlice]
    top_videos: List[TopVideoPoint]
    top_keywords: List[KeywordCount]

class KpiResponse(CamelModel):
    total_videos: int
    engagement_rate: float
    summary: VideoStatsSummary
    top_video: Optional[VideoData] = None
    platform_distribution: Dict[str, int]
