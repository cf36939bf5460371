from sqlalchemy import Column, String, Text, Integer, BigInteger, Float, TIMESTAMP, JSON
from datetime import datetime
from jiazheng_assistant.core.database import Base


class VideoRecord(Base):
    """One creator-submitted post and its performance numbers."""
    __tablename__ = "video_records"

    id = Column(String(32), primary_key=True, index=True)
    # Insertion order; breaks ties between equal created_at values
    seq = Column(BigInteger, index=True)

    # ── Content ───────────────────────────────────────────────────────────────
    title    = Column(Text, default="")
    content  = Column(Text, default="")
    keywords = Column(JSON, default=list)

    # ── Engagement counters (never negative) ──────────────────────────────────
    views    = Column(BigInteger, default=0)
    likes    = Column(BigInteger, default=0)
    comments = Column(BigInteger, default=0)
    shares   = Column(BigInteger, default=0)

    # ── Categorical ───────────────────────────────────────────────────────────
    platform          = Column(String(20), default="other")
    # douyin | xiaohongshu | kuaishou | shipinhao | bilibili | other
    service_type      = Column(String(20), nullable=True)
    # cleaning | babysitting | eldercare | cooking | laundry | other
    target_age        = Column(String(10), nullable=True)   # young | middle | senior | all
    service_frequency = Column(String(12), nullable=True)   # daily | weekly | monthly | occasional
    location          = Column(String, nullable=True)

    # ── Optional numbers (NULL = not provided, excluded from averages) ────────
    duration              = Column(Integer, nullable=True)  # seconds
    price                 = Column(Float, nullable=True)
    customer_satisfaction = Column(Float, nullable=True)    # 1-5
    completion_rate       = Column(Float, nullable=True)    # 0-100
    engagement_rate       = Column(Float, nullable=True)    # 0-100
    conversion_rate       = Column(Float, nullable=True)    # 0-100

    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)
