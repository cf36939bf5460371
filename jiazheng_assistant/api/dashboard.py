from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jiazheng_assistant.core.database import get_db
from jiazheng_assistant.services.dashboard_service import DashboardService
from jiazheng_assistant.schemas.stats import ChartResponse, ComprehensiveMetrics, KpiResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard Analytics"])

# 1. KPI Summary
@router.get("/kpis", response_model=KpiResponse)
def get_dashboard_kpis(db: Session = Depends(get_db)):
    service = DashboardService(db)
    return service.get_kpis()

# 2. Charts (platform pie, top videos, top keywords)
@router.get("/charts", response_model=ChartResponse)
def get_dashboard_charts(db: Session = Depends(get_db)):
    service = DashboardService(db)
    return service.get_charts()

# 3. Comprehensive Analytics
@router.get("/comprehensive", response_model=ComprehensiveMetrics)
def get_comprehensive(db: Session = Depends(get_db)):
    service = DashboardService(db)
    return service.get_comprehensive()
