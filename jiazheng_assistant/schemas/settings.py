from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

# --- AI USAGE ---
class AIUsageLogSchema(BaseModel):
    id: int
    task_type: str
    model_name: Optional[str]
    input_tokens: int
    output_tokens: int
    total_tokens: int
    estimated_cost: float
    intent: Optional[str]
    video_count: int
    status: str # success, fallback
    error_message: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
        protected_namespaces = ()

class AIUsageResponse(BaseModel):
    data: List[AIUsageLogSchema]
    total: int
    page: int
    limit: int

# --- SETTINGS KPI ---
class SystemKPIs(BaseModel):
    total_ai_cost: float
    total_requests: int
    requests_today: int
    fallback_requests: int
    total_tokens: int
    # share of requests the model answered, 0-100
    llm_success_rate: float
