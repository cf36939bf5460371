from enum import Enum


class IntentKind(str, Enum):
    COMPREHENSIVE_ANALYSIS = "comprehensive_analysis"
    TRENDING_TOPICS = "trending_topics"
    CUSTOM_CREATION = "custom_creation"
    ONE_CLICK_GENERATION = "one_click_generation"
    KEYWORD_STRATEGY = "keyword_strategy"
    GENERAL = "general"


def _any(*markers):
    return lambda text: any(m in text for m in markers)


def _all(*markers):
    return lambda text: all(m in text for m in markers)


def _either(*predicates):
    return lambda text: any(p(text) for p in predicates)


# Evaluated top to bottom, first match wins. A message that matches several
# rules resolves to the earliest one, so the order here must not change.
INTENT_RULES = [
    (
        _either(_any("综合分析"), _all("分析", "创作习惯")),
        IntentKind.COMPREHENSIVE_ANALYSIS,
    ),
    (
        _either(_any("追踪热点", "追热点"), _all("热点", "结合")),
        IntentKind.TRENDING_TOPICS,
    ),
    (
        _either(_any("定制创作", "具体的创作需求"), _all("定制", "需求")),
        IntentKind.CUSTOM_CREATION,
    ),
    (
        _either(
            _any("一键生成"),
            _all("生成", "爆款标题"),
            _all("生成", "内容脚本"),
        ),
        IntentKind.ONE_CLICK_GENERATION,
    ),
    (
        _any("关键词", "keyword"),
        IntentKind.KEYWORD_STRATEGY,
    ),
]


def classify_intent(message: str) -> IntentKind:
    text = (message or "").lower()
    for predicate, intent in INTENT_RULES:
        if predicate(text):
            return intent
    return IntentKind.GENERAL
