import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

load_dotenv()


def _build_database_url():
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    host = os.getenv("DB_HOST")
    if not host:
        # Local development falls back to a SQLite file
        return "sqlite:///./jiazheng_assistant.db"

    user = os.getenv("DB_USER")
    password = quote_plus(os.getenv("DB_PASSWORD") or "")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME")
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


class Settings:
    APP_TITLE = os.getenv("APP_TITLE", "AI-Home-Assistant")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # DATABASE
    DATABASE_URL = _build_database_url()

    # CORS
    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if o.strip()
    ]

    # LLM SETTINGS (OpenRouter speaks the OpenAI protocol)
    OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
    LLM_BASE_URL = os.getenv("LLM_BASE_URL", "https://openrouter.ai/api/v1")
    LLM_MODEL = os.getenv("LLM_MODEL", "deepseek/deepseek-r1-0528:free")
    LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "2000"))
    LLM_ENABLED = os.getenv("LLM_ENABLED", "true").lower() in ("1", "true", "yes")
    SITE_URL = os.getenv("SITE_URL", "http://localhost:3000")

    # Delay between streamed characters of a chat reply
    CHAT_STREAM_DELAY_MS = int(os.getenv("CHAT_STREAM_DELAY_MS", "15"))

    # WECHAT PAY (mock checkout, nothing is signed)
    WECHAT_APPID = os.getenv("WECHAT_APPID", "your_wechat_appid")
    WECHAT_MCH_ID = os.getenv("WECHAT_MCH_ID", "")
    WECHAT_API_KEY = os.getenv("WECHAT_API_KEY", "")
    NOTIFY_URL = os.getenv("NOTIFY_URL", "https://your-domain.com/api/wechat-pay/notify")

    # AI COST (USD per 1M tokens)
    PRICE_PER_1M_INPUT = 0.14
    PRICE_PER_1M_OUTPUT = 0.28


settings = Settings()
