import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from jiazheng_assistant.models.video_record import VideoRecord
from jiazheng_assistant.schemas.video import VideoCreate, VideoResponse
from jiazheng_assistant.schemas.stats import VideoStatsSummary
from jiazheng_assistant.services.stats_service import StatsAggregator

# Columns copied straight into the response schema
_FIELDS = [c.name for c in VideoRecord.__table__.columns if c.name not in ("seq", "updated_at")]


def next_seq(db: Session) -> int:
    return (db.query(func.max(VideoRecord.seq)).scalar() or 0) + 1


class VideoService:
    """Storage for video records; id and created_at are assigned here and never change."""

    def __init__(self, db: Session):
        self.db = db

    def _to_response(self, row: VideoRecord) -> VideoResponse:
        return VideoResponse(**{name: getattr(row, name) for name in _FIELDS})

    def _get_row(self, video_id: str) -> Optional[VideoRecord]:
        return self.db.query(VideoRecord).filter(VideoRecord.id == video_id).first()

    def list_videos(self) -> List[VideoResponse]:
        """Oldest first; first-seen order decides ties in rankings."""
        rows = self.db.query(VideoRecord).order_by(VideoRecord.created_at.asc(), VideoRecord.seq.asc()).all()
        return [self._to_response(r) for r in rows]

    def get_video(self, video_id: str) -> Optional[VideoResponse]:
        row = self._get_row(video_id)
        return self._to_response(row) if row else None

    def create_video(self, data: VideoCreate) -> VideoResponse:
        row = VideoRecord(
            id=uuid.uuid4().hex,
            seq=next_seq(self.db),
            created_at=datetime.utcnow(),
            **data.model_dump(mode="json")
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return self._to_response(row)

    def update_video(self, video_id: str, data: VideoCreate) -> Optional[VideoResponse]:
        """Full-field replacement: every field not supplied goes back to its default."""
        row = self._get_row(video_id)
        if not row:
            return None

        for key, value in data.model_dump(mode="json").items():
            setattr(row, key, value)

        row.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(row)
        return self._to_response(row)

    def delete_video(self, video_id: str) -> bool:
        row = self._get_row(video_id)
        if not row:
            return False

        self.db.delete(row)
        self.db.commit()
        return True

    def get_video_stats(self) -> VideoStatsSummary:
        return StatsAggregator().summary(self.list_videos())
