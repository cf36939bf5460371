from sqlalchemy.orm import Session
from sqlalchemy import func, desc
from datetime import datetime

from jiazheng_assistant.models.ai_usage import AIUsageLog


class SettingsService:
    def __init__(self, db: Session):
        self.db = db

    # --- AI USAGE ---
    def get_ai_logs(self, page: int, limit: int):
        page = max(page, 1)
        limit = max(min(limit, 100), 1)

        query = self.db.query(AIUsageLog)
        total = query.count()
        results = query.order_by(desc(AIUsageLog.created_at), desc(AIUsageLog.id))\
                       .offset((page - 1) * limit)\
                       .limit(limit).all()

        return {"data": results, "total": total, "page": page, "limit": limit}

    # --- SYSTEM KPIS ---
    def get_system_kpis(self):
        # 1. Total AI Cost
        total_cost = self.db.query(func.sum(AIUsageLog.estimated_cost)).scalar() or 0.0

        # 2. Request volume
        total_requests = self.db.query(func.count(AIUsageLog.id)).scalar() or 0
        today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        requests_today = self.db.query(func.count(AIUsageLog.id))\
            .filter(AIUsageLog.created_at >= today).scalar() or 0

        # 3. Local responder answered instead of the model
        fallback_requests = self.db.query(func.count(AIUsageLog.id))\
            .filter(AIUsageLog.status == "fallback").scalar() or 0

        # 4. Tokens
        total_tokens = self.db.query(func.sum(AIUsageLog.total_tokens)).scalar() or 0

        success_rate = 0.0
        if total_requests:
            success_rate = (total_requests - fallback_requests) * 100 / total_requests

        return {
            "total_ai_cost": round(total_cost, 4),
            "total_requests": total_requests,
            "requests_today": requests_today,
            "fallback_requests": fallback_requests,
            "total_tokens": int(total_tokens),
            "llm_success_rate": round(success_rate, 2),
        }
