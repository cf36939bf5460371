from .video_record import VideoRecord
from .ai_usage import AIUsageLog

__all__ = [
    "VideoRecord",
    "AIUsageLog",
]
