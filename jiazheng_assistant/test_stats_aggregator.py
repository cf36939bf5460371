import math

import pytest

from jiazheng_assistant.schemas.video import Platform, ServiceType, VideoData
from jiazheng_assistant.services.stats_service import (
    DEFAULT_CONTENT_LENGTH,
    DEFAULT_TITLE_LENGTH,
    MIN_CONTENT_LENGTH,
    MIN_TITLE_LENGTH,
    StatsAggregator,
    round_half_up,
)


@pytest.fixture
def aggregator():
    return StatsAggregator()


@pytest.fixture
def two_records():
    return [
        {"title": "低播放", "views": 100, "likes": 10},
        {"title": "高播放", "views": 300, "likes": 9},
    ]


def test_totals_rates_and_best_record(aggregator, two_records):
    stats = aggregator.aggregate(two_records)

    assert stats.video_count == 2
    assert stats.total_views == 400
    assert stats.total_likes == 19
    assert stats.average_views == 200
    assert stats.average_likes == 10  # 9.5 rounds half up
    assert stats.best_record.views == 300
    assert stats.like_rate == pytest.approx(4.75)


def test_empty_input_gives_zeroes(aggregator):
    stats = aggregator.aggregate([])

    assert stats.video_count == 0
    assert stats.total_views == stats.total_likes == stats.total_comments == stats.total_shares == 0
    assert stats.average_views == stats.average_likes == 0
    assert stats.like_rate == stats.comment_rate == stats.share_rate == 0
    assert stats.best_record is None
    assert stats.top_keywords == []
    assert stats.platform_distribution == {}
    assert stats.length_preference.title_length == DEFAULT_TITLE_LENGTH
    assert stats.length_preference.content_length == DEFAULT_CONTENT_LENGTH


def test_none_is_treated_as_empty(aggregator):
    assert aggregator.aggregate(None).video_count == 0


def test_rates_are_zero_without_views(aggregator):
    stats = aggregator.aggregate([{"views": 0, "likes": 5, "comments": 2, "shares": 1}])

    assert stats.like_rate == 0
    assert stats.comment_rate == 0
    assert stats.share_rate == 0
    assert all(math.isfinite(r) for r in (stats.like_rate, stats.comment_rate, stats.share_rate))


def test_sums_do_not_depend_on_order(aggregator):
    records = [
        {"views": 5, "likes": 1, "comments": 2, "shares": 3},
        {"views": 70, "likes": 8, "comments": 0, "shares": 1},
        {"views": 900, "likes": 40, "comments": 12, "shares": 6},
    ]
    forward = aggregator.summary(records)
    backward = aggregator.summary(list(reversed(records)))

    assert forward == backward


def test_best_record_keeps_first_on_ties(aggregator):
    records = [
        {"title": "先发", "views": 500},
        {"title": "后发", "views": 500},
        {"title": "较少", "views": 100},
    ]
    assert aggregator.best_record(records).title == "先发"


def test_keyword_ranking_ties_keep_first_seen_order(aggregator):
    records = [
        {"keywords": ["收纳", "保洁"]},
        {"keywords": ["保洁", "收纳", "月嫂"]},
    ]
    ranking = aggregator.top_keywords(records)

    assert [(k.keyword, k.count) for k in ranking] == [("收纳", 2), ("保洁", 2), ("月嫂", 1)]


def test_keyword_ranking_is_case_sensitive_and_capped(aggregator):
    records = [{"keywords": ["Tips", "tips", "a", "b", "c", "d"]}]
    ranking = aggregator.top_keywords(records)

    assert len(ranking) == 5
    assert ranking[0].keyword == "Tips"
    assert ranking[1].keyword == "tips"


def test_platform_distribution_counts_unknown_as_other(aggregator):
    records = [{"platform": "douyin"}, {"platform": "douyin"}, {"platform": "weibo"}]

    assert aggregator.platform_distribution(records) == {"douyin": 2, "other": 1}


def test_length_preference_never_below_floors(aggregator):
    pref = aggregator.length_preference([{"title": "短", "content": "很短"}])

    assert pref.title_length == MIN_TITLE_LENGTH
    assert pref.content_length == MIN_CONTENT_LENGTH


def test_length_preference_uses_averages_above_floors(aggregator):
    records = [
        {"title": "一" * 30, "content": "二" * 300},
        {"title": "一" * 21, "content": "二" * 201},
    ]
    pref = aggregator.length_preference(records)

    assert pref.title_length == 26  # 25.5 rounds half up
    assert pref.content_length == 251


def test_style_signals(aggregator):
    records = [
        {"title": "大扫除攻略！🔥", "content": "步骤：先擦窗、再拖地"},
        {"title": "你家需要保洁吗？", "content": "客户说“太干净了”"},
    ]
    style = aggregator.style_signals(records)

    assert style.has_emoji
    assert style.has_exclamation
    assert style.has_question
    assert style.has_structured_content
    assert style.has_dialogue


def test_style_signals_without_text(aggregator):
    style = aggregator.style_signals([{"views": 10}])

    assert style.avg_title_length == 0
    assert style.avg_content_length == 0
    assert not style.has_emoji


def test_malformed_input_is_coerced():
    video = VideoData.model_validate({
        "views": "abc",
        "likes": -5,
        "comments": "12",
        "shares": None,
        "keywords": "保洁，收纳, 家政阿姨 ,",
        "platform": "XiaoHongShu",
        "serviceType": "gardening",
        "customerSatisfaction": 9,
        "completionRate": "85.5",
        "createdAt": "2024-01-15T08:30:00.000Z",
    })

    assert video.views == 0
    assert video.likes == 0
    assert video.comments == 12
    assert video.shares == 0
    assert video.keywords == ["保洁", "收纳", "家政阿姨"]
    assert video.platform == Platform.XIAOHONGSHU
    assert video.service_type == ServiceType.OTHER
    assert video.customer_satisfaction is None
    assert video.completion_rate == 85.5
    assert video.created_at.year == 2024


def test_counters_are_capped_at_bigint_range():
    video = VideoData.model_validate({"views": 10 ** 20, "shares": "1e30", "likes": 42})

    assert video.views == 2 ** 63 - 1
    assert video.shares == 2 ** 63 - 1
    assert video.likes == 42


def test_comprehensive_metrics_skip_missing_fields(aggregator):
    records = [
        {"views": 1000, "likes": 50, "comments": 30, "shares": 20, "price": 100, "customerSatisfaction": 4},
        {"views": 1000, "likes": 0, "price": None, "customerSatisfaction": 5},
    ]
    metrics = aggregator.comprehensive_metrics(records)

    assert metrics.total_videos == 2
    assert metrics.avg_price == 100
    assert metrics.avg_satisfaction == 4.5
    assert metrics.avg_completion == 0
    assert metrics.engagement_rate == pytest.approx(5.0)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
