import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy.orm import Session

from jiazheng_assistant.core.config import settings
from jiazheng_assistant.models.ai_usage import AIUsageLog
from jiazheng_assistant.services.fallback_responder import FallbackResponder
from jiazheng_assistant.services.intent_classifier import IntentKind, classify_intent
from jiazheng_assistant.services.llm_service import LLMService
from jiazheng_assistant.services.prompt_builder import PromptBuilder
from jiazheng_assistant.services.stats_service import StatsAggregator

logger = logging.getLogger(__name__)

START_MESSAGE = "正在分析您的需求..."
STREAM_ERROR_MESSAGE = "抱歉，AI分析服务暂时不可用，请稍后再试。"


def estimate_tokens(text: str) -> int:
    return len(text) if text else 0


def sse_event(chunk_type: str, content: str, is_complete: bool) -> str:
    payload = {"type": chunk_type, "content": content, "isComplete": is_complete}
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


@dataclass
class ChatResult:
    reply: str
    intent: IntentKind
    source: str # "llm" | "fallback"
    video_count: int


class ChatService:
    """
    Answers a creator's chat message.

    Tries the external model first; any failure there is logged and the
    local rule-based responder answers instead, so the caller always gets
    a usable reply.
    """

    def __init__(
        self,
        db: Optional[Session] = None,
        llm: Optional[LLMService] = None,
        aggregator: Optional[StatsAggregator] = None,
    ):
        self.db = db
        self.llm = llm or LLMService()
        self.aggregator = aggregator or StatsAggregator()
        self.prompt_builder = PromptBuilder(self.aggregator)
        self.fallback = FallbackResponder(self.aggregator)

    def generate_reply(self, message: str, records: Optional[List] = None) -> ChatResult:
        videos = self.aggregator.normalize(records)
        intent = classify_intent(message)
        system_prompt = user_prompt = ""
        error = None

        if not self.llm.is_configured:
            logger.info("🔧 LLM not configured, answering with the local responder")
            reply, source = self.fallback.respond(message, videos), "fallback"
        else:
            try:
                system_prompt = self.prompt_builder.build_system_prompt(videos)
                user_prompt = self.prompt_builder.build_user_prompt(message, videos)
                reply, source = self.llm.generate_reply(system_prompt, user_prompt), "llm"
            except Exception as e:
                logger.error(f"AI API call failed, answering with the local responder: {e}")
                error = str(e)
                reply, source = self.fallback.respond(message, videos), "fallback"

        self._log_usage(intent, len(videos), system_prompt + user_prompt, reply, source, error)
        return ChatResult(reply=reply, intent=intent, source=source, video_count=len(videos))

    def stream_events(self, reply: str) -> Iterator[str]:
        """SSE frames for one reply, one character per chunk."""
        for i, char in enumerate(reply):
            yield sse_event("chunk", char, i == len(reply) - 1)

    # ------------------------------------------------------------------
    # USAGE LOGGING
    # ------------------------------------------------------------------

    def _log_usage(self, intent, video_count, input_str, output_str, source, error):
        if self.db is None:
            return

        input_tokens = estimate_tokens(input_str) if source == "llm" else 0
        output_tokens = estimate_tokens(output_str) if source == "llm" else 0
        cost = (input_tokens / 1_000_000 * settings.PRICE_PER_1M_INPUT) + \
               (output_tokens / 1_000_000 * settings.PRICE_PER_1M_OUTPUT)

        try:
            self.db.add(AIUsageLog(
                task_type="chat_reply",
                model_name=self.llm.model if source == "llm" else "local_fallback",
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                total_tokens=input_tokens + output_tokens,
                estimated_cost=round(cost, 6),
                intent=intent.value,
                video_count=video_count,
                status="success" if source == "llm" else "fallback",
                error_message=error,
                created_at=datetime.utcnow()
            ))
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Failed to record AI usage: {e}")
