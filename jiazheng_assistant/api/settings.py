from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jiazheng_assistant.core.database import get_db
from jiazheng_assistant.services.settings_service import SettingsService
from jiazheng_assistant.schemas.settings import AIUsageResponse, SystemKPIs

router = APIRouter(prefix="/api/settings", tags=["Settings & Logs"])

@router.get("/kpis", response_model=SystemKPIs)
def get_usage_kpis(db: Session = Depends(get_db)):
    service = SettingsService(db)
    return service.get_system_kpis()

@router.get("/ai-logs", response_model=AIUsageResponse)
def get_ai_usage(page: int = 1, limit: int = 20, db: Session = Depends(get_db)):
    service = SettingsService(db)
    return service.get_ai_logs(page, limit)
