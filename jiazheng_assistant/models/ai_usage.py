from sqlalchemy import Column, Integer, String, Float, Text, TIMESTAMP
from jiazheng_assistant.core.database import Base


class AIUsageLog(Base):
    """One chat reply: who answered it and what it cost."""
    __tablename__ = "ai_usage_logs"

    id = Column(Integer, primary_key=True, index=True)

    task_type  = Column(String)             # chat_reply
    model_name = Column(String)             # OpenRouter model id, or local_fallback

    # ── Tokens & cost (estimated, 0 for local replies) ───────────────────────
    input_tokens   = Column(Integer, default=0)
    output_tokens  = Column(Integer, default=0)
    total_tokens   = Column(Integer, default=0)
    estimated_cost = Column(Float, default=0.0)  # USD

    # ── Request context ──────────────────────────────────────────────────────
    intent      = Column(String)
    video_count = Column(Integer, default=0)

    status        = Column(String, default="success")  # success | fallback
    error_message = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP)
