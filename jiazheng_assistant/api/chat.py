import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from jiazheng_assistant.core.config import settings
from jiazheng_assistant.core.database import SessionLocal, get_db
from jiazheng_assistant.schemas.chat import ChatRequest, ChatResponse
from jiazheng_assistant.services.chat_service import (
    START_MESSAGE,
    STREAM_ERROR_MESSAGE,
    ChatService,
    sse_event,
)
from jiazheng_assistant.services.video_service import VideoService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["AI Assistant"])


@router.post("")
async def chat(payload: ChatRequest, db: Session = Depends(get_db)):
    message = payload.message.strip()
    if not message:
        raise HTTPException(status_code=400, detail="消息不能为空")

    videos = payload.videos
    if videos is None:
        videos = await run_in_threadpool(VideoService(db).list_videos)

    if not payload.stream:
        result = await run_in_threadpool(ChatService(db).generate_reply, message, videos)
        return ChatResponse(
            reply=result.reply,
            intent=result.intent.value,
            source=result.source,
            video_count=result.video_count,
        )

    return StreamingResponse(
        _event_stream(message, videos),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


async def _event_stream(message, videos):
    """start chunk, then the reply one character at a time; error chunk if anything breaks."""
    yield sse_event("start", START_MESSAGE, False)

    delay = settings.CHAT_STREAM_DELAY_MS / 1000
    # The request-scoped session may already be closed once the body streams
    log_db = SessionLocal()
    try:
        service = ChatService(log_db)
        result = await run_in_threadpool(service.generate_reply, message, videos)
        for frame in service.stream_events(result.reply):
            yield frame
            if delay > 0:
                await asyncio.sleep(delay)
    except Exception as e:
        logger.exception(f"❌ Chat stream failed: {e}")
        yield sse_event("error", STREAM_ERROR_MESSAGE, True)
    finally:
        log_db.close()
