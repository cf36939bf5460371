import json

import pytest

from jiazheng_assistant.core.database import Base, SessionLocal, engine
from jiazheng_assistant.core.exceptions import LLMServiceError
from jiazheng_assistant.models.ai_usage import AIUsageLog
from jiazheng_assistant.services.chat_service import ChatService, sse_event
from jiazheng_assistant.services.fallback_responder import (
    SAFE_REPLY,
    FallbackResponder,
    generate_fallback_response,
)
from jiazheng_assistant.services.intent_classifier import IntentKind, classify_intent
from jiazheng_assistant.services.prompt_builder import PromptBuilder


RECORDS = [
    {
        "title": "家政阿姨的收纳秘籍！",
        "content": "今天教大家：衣柜收纳、厨房整理",
        "keywords": ["收纳", "家政阿姨"],
        "views": 12345,
        "likes": 678,
        "comments": 90,
        "shares": 12,
        "platform": "douyin",
    },
    {
        "title": "月嫂一天的工作",
        "content": "早上六点起床",
        "keywords": ["月嫂", "收纳"],
        "views": 2000,
        "likes": 100,
        "platform": "xiaohongshu",
    },
]


class FailingLLM:
    model = "fake-model"
    is_configured = True

    def generate_reply(self, system_prompt, user_prompt):
        raise LLMServiceError("upstream unavailable", status_code=503)


class EchoLLM:
    model = "fake-model"
    is_configured = True

    def __init__(self):
        self.calls = []

    def generate_reply(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        return "这是模型的回答"


class DisabledLLM:
    model = "fake-model"
    is_configured = False

    def generate_reply(self, system_prompt, user_prompt):
        raise AssertionError("should not be called")


# ── Intent classification ────────────────────────────────────────────────────

@pytest.mark.parametrize("message, expected", [
    ("帮我做综合分析和追踪热点", IntentKind.COMPREHENSIVE_ANALYSIS),
    ("分析一下我的创作习惯", IntentKind.COMPREHENSIVE_ANALYSIS),
    ("我想追热点", IntentKind.TRENDING_TOPICS),
    ("结合最近的热点写一条", IntentKind.TRENDING_TOPICS),
    ("我有具体的创作需求", IntentKind.CUSTOM_CREATION),
    ("帮我定制一个符合需求的方案", IntentKind.CUSTOM_CREATION),
    ("一键生成", IntentKind.ONE_CLICK_GENERATION),
    ("帮我生成爆款标题", IntentKind.ONE_CLICK_GENERATION),
    ("生成一个内容脚本", IntentKind.ONE_CLICK_GENERATION),
    ("推荐一些关键词", IntentKind.KEYWORD_STRATEGY),
    ("Any KEYWORD ideas?", IntentKind.KEYWORD_STRATEGY),
    ("你好", IntentKind.GENERAL),
    ("", IntentKind.GENERAL),
])
def test_classify_intent(message, expected):
    assert classify_intent(message) == expected


def test_earlier_rule_wins_when_several_match():
    # trending + keyword markers together resolve to trending
    assert classify_intent("追踪热点需要哪些关键词") == IntentKind.TRENDING_TOPICS


# ── Prompt building ──────────────────────────────────────────────────────────

def test_system_prompt_without_data_asks_for_upload():
    prompt = PromptBuilder().build_system_prompt([])

    assert "应该引导用户先上传数据" in prompt
    assert "暂无视频数据" in prompt


def test_system_prompt_with_data_contains_totals():
    prompt = PromptBuilder().build_system_prompt(RECORDS)

    assert "14345" in prompt
    assert "视频数量：** 2个" in prompt
    assert "应该引导用户先上传数据" not in prompt
    assert "标题长度偏好" in prompt


def test_zero_rates_keep_two_decimals_when_there_are_views():
    prompt = PromptBuilder().build_system_prompt([{"title": "无人点赞", "views": 100, "likes": 0}])

    assert "点赞率：0.00%" in prompt
    assert "评论率：0.00%" in prompt


def test_rates_are_bare_zero_without_views():
    prompt = PromptBuilder().build_system_prompt([{"title": "还没播放", "views": 0, "likes": 3}])

    assert "点赞率：0%" in prompt


def test_user_prompt_wraps_message_unchanged():
    builder = PromptBuilder()
    message = "帮我写一个关于收纳的标题？"

    with_data = builder.build_user_prompt(message, RECORDS)
    without_data = builder.build_user_prompt(message, [])

    assert f"用户问题：{message}" in with_data
    assert "2个视频数据" in with_data
    assert f"用户问题：{message}" in without_data
    assert "还没有上传任何视频数据" in without_data


# ── Fallback responder ───────────────────────────────────────────────────────

@pytest.mark.parametrize("message", [
    "综合分析", "追踪热点", "定制创作", "一键生成", "关键词", "随便聊聊",
])
@pytest.mark.parametrize("records", [[], RECORDS])
def test_fallback_is_never_empty(message, records):
    assert generate_fallback_response(message, records).strip()


def test_fallback_analysis_uses_creator_data():
    reply = generate_fallback_response("综合分析", RECORDS)

    assert "基于您上传的2个视频数据" in reply
    assert "14345" in reply
    assert "抖音" in reply


def test_fallback_keyword_strategy_lists_top_keywords():
    reply = generate_fallback_response("关键词推荐", RECORDS)

    assert "收纳" in reply
    assert "主关键词：在标题开头使用，如\"收纳\"" in reply


def test_fallback_one_click_without_data_offers_templates():
    reply = generate_fallback_response("一键生成", [])

    assert "通用爆款标题模板" in reply


def test_fallback_handler_errors_return_safe_reply():
    responder = FallbackResponder()

    def broken(videos):
        raise RuntimeError("boom")

    responder._handlers[IntentKind.GENERAL] = broken
    assert responder.respond("你好", RECORDS) == SAFE_REPLY


# ── Chat service ─────────────────────────────────────────────────────────────

def test_llm_failure_returns_fallback_for_same_input():
    message = "一键生成爆款标题"
    result = ChatService(llm=FailingLLM()).generate_reply(message, RECORDS)

    assert result.source == "fallback"
    assert result.reply == generate_fallback_response(message, RECORDS)
    assert result.intent == IntentKind.ONE_CLICK_GENERATION
    assert result.video_count == 2


def test_llm_reply_is_used_when_available():
    llm = EchoLLM()
    result = ChatService(llm=llm).generate_reply("综合分析", RECORDS)

    assert result.source == "llm"
    assert result.reply == "这是模型的回答"
    system_prompt, user_prompt = llm.calls[0]
    assert "14345" in system_prompt
    assert "用户问题：综合分析" in user_prompt


def test_unconfigured_llm_skips_straight_to_fallback():
    result = ChatService(llm=DisabledLLM()).generate_reply("你好", [])

    assert result.source == "fallback"
    assert result.reply == generate_fallback_response("你好", [])


def test_usage_is_logged():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        db.query(AIUsageLog).delete()
        db.commit()

        ChatService(db, llm=FailingLLM()).generate_reply("综合分析", RECORDS)
        ChatService(db, llm=EchoLLM()).generate_reply("综合分析", RECORDS)

        logs = db.query(AIUsageLog).order_by(AIUsageLog.id).all()
        assert [log.status for log in logs] == ["fallback", "success"]
        assert logs[0].model_name == "local_fallback"
        assert logs[0].error_message
        assert logs[1].total_tokens > 0
        assert logs[1].intent == IntentKind.COMPREHENSIVE_ANALYSIS.value
    finally:
        db.close()


def test_sse_event_format():
    frame = sse_event("chunk", "好", True)

    assert frame == 'data: {"type": "chunk", "content": "好", "isComplete": true}\n\n'


def test_stream_events_one_char_per_chunk():
    frames = list(ChatService(llm=DisabledLLM()).stream_events("你好"))
    payloads = [json.loads(f[len("data: "):]) for f in frames]

    assert [p["content"] for p in payloads] == ["你", "好"]
    assert [p["isComplete"] for p in payloads] == [False, True]
