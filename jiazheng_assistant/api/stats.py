from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jiazheng_assistant.core.database import get_db
from jiazheng_assistant.schemas.stats import AggregateStats, LengthPreference, VideoStatsSummary
from jiazheng_assistant.services.stats_service import StatsAggregator
from jiazheng_assistant.services.video_service import VideoService

router = APIRouter(prefix="/stats", tags=["Analytics"])

# ---------------------------------------------------------
# 1. HEADER TOTALS
# ---------------------------------------------------------
@router.get("/overview", response_model=VideoStatsSummary)
def get_overview(db: Session = Depends(get_db)):
    """
    Totals and integer averages for the top of the dashboard.
    """
    return VideoService(db).get_video_stats()

# ---------------------------------------------------------
# 2. FULL AGGREGATE (rates, keywords, style, best record)
# ---------------------------------------------------------
@router.get("/aggregate", response_model=AggregateStats)
def get_aggregate(db: Session = Depends(get_db)):
    videos = VideoService(db).list_videos()
    return StatsAggregator().aggregate(videos)

# ---------------------------------------------------------
# 3. LENGTH GUIDANCE FOR NEW SCRIPTS
# ---------------------------------------------------------
@router.get("/length-preference", response_model=LengthPreference)
def get_length_preference(db: Session = Depends(get_db)):
    videos = VideoService(db).list_videos()
    return StatsAggregator().length_preference(videos)
