import logging

from fastapi import APIRouter, HTTPException, Query

from jiazheng_assistant.schemas.hotspot import HotspotResponse
from jiazheng_assistant.services.hotspot_service import HotspotService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/industry-hotspots", tags=["Industry Hotspots"])


@router.get("", response_model=HotspotResponse)
def get_industry_hotspots(timeframe: str = Query("today")):
    try:
        data = HotspotService().get_hotspots(timeframe)
    except Exception as e:
        logger.error(f"Industry hotspots error: {e}")
        raise HTTPException(status_code=500, detail="获取行业热点数据失败")

    return HotspotResponse(success=True, data=data)
