import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jiazheng_assistant.core.config import settings
from jiazheng_assistant.core.database import Base, engine
from jiazheng_assistant.api import chat, dashboard, hotspots, payments, settings as settings_api, stats, videos

from jiazheng_assistant.models import *

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(title=settings.APP_TITLE)

# -------------------------
# CORS (dashboard front end)
# -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------
# Include Routers
# -------------------------
app.include_router(videos.router)
app.include_router(stats.router)
app.include_router(dashboard.router)
app.include_router(chat.router)
app.include_router(hotspots.router)
app.include_router(payments.router)
app.include_router(settings_api.router)


# -------------------------
# DB INIT
# -------------------------
Base.metadata.create_all(bind=engine)

if not settings.OPENROUTER_API_KEY:
    logger.warning("⚠️ OPENROUTER_API_KEY is not set, chat will answer with the local responder")

# -------------------------
# Routes
# -------------------------

@app.get("/")
def root():
    return {"status": "running"}
