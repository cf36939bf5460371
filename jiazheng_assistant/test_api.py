import json

import pytest
from fastapi.testclient import TestClient

from jiazheng_assistant.main import app
from jiazheng_assistant.core.database import SessionLocal
from jiazheng_assistant.models import AIUsageLog, VideoRecord
from jiazheng_assistant.services.fallback_responder import generate_fallback_response

client = TestClient(app)


@pytest.fixture(autouse=True)
def clean_db():
    db = SessionLocal()
    try:
        db.query(VideoRecord).delete()
        db.query(AIUsageLog).delete()
        db.commit()
    finally:
        db.close()
    yield


def create(**fields):
    response = client.post("/api/videos", json=fields)
    assert response.status_code == 200, response.text
    return response.json()


def parse_sse(text):
    return [
        json.loads(frame[len("data: "):])
        for frame in text.split("\n\n")
        if frame.startswith("data: ")
    ]


def test_root():
    assert client.get("/").json() == {"status": "running"}


# --- VIDEO RECORDS ---

def test_create_coerces_and_assigns_identity():
    video = create(
        title="保洁小技巧",
        views="1500",
        likes=-3,
        keywords="保洁，收纳",
        platform="douyin",
        serviceType="gardening",
        customerSatisfaction=4.5,
    )

    assert video["id"]
    assert video["createdAt"]
    assert video["views"] == 1500
    assert video["likes"] == 0
    assert video["keywords"] == ["保洁", "收纳"]
    assert video["platform"] == "douyin"
    assert video["serviceType"] == "other"
    assert video["customerSatisfaction"] == 4.5


def test_huge_counters_are_capped():
    video = create(title="爆款", views=10 ** 20, likes=10 ** 19)

    assert video["views"] == 2 ** 63 - 1
    assert video["likes"] == 2 ** 63 - 1
    assert client.get("/stats/overview").json()["totalViews"] == 2 ** 63 - 1


def test_crud_roundtrip():
    video = create(title="原标题", views=100, likes=10, price=80)

    listed = client.get("/api/videos").json()
    assert [v["id"] for v in listed] == [video["id"]]
    assert client.get(f"/api/videos/{video['id']}").json()["title"] == "原标题"

    # full replacement: fields left out go back to defaults
    updated = client.put(f"/api/videos/{video['id']}", json={"title": "新标题", "views": 200})
    assert updated.status_code == 200
    body = updated.json()
    assert body["title"] == "新标题"
    assert body["views"] == 200
    assert body["likes"] == 0
    assert body["price"] is None
    assert body["id"] == video["id"]
    assert body["createdAt"] == video["createdAt"]

    assert client.delete(f"/api/videos/{video['id']}").status_code == 200
    assert client.get(f"/api/videos/{video['id']}").status_code == 404


def test_missing_video_is_404():
    assert client.get("/api/videos/nope").status_code == 404
    assert client.put("/api/videos/nope", json={"title": "x"}).status_code == 404
    assert client.delete("/api/videos/nope").status_code == 404


# --- STATS ---

def test_stats_endpoints():
    create(title="低播放", views=100, likes=10)
    create(title="高播放", views=300, likes=9)

    overview = client.get("/stats/overview").json()
    assert overview["totalViews"] == 400
    assert overview["totalLikes"] == 19
    assert overview["averageViews"] == 200

    aggregate = client.get("/stats/aggregate").json()
    assert aggregate["videoCount"] == 2
    assert aggregate["likeRate"] == pytest.approx(4.75)
    assert aggregate["bestRecord"]["views"] == 300


def test_length_preference_defaults_when_empty():
    pref = client.get("/stats/length-preference").json()

    assert pref == {"titleLength": 25, "contentLength": 150}


# --- DASHBOARD ---

def test_dashboard_charts_truncate_and_normalize():
    long_title = "家" * 25
    create(title=long_title, views=10, keywords=[" Baojie ", "收纳"], platform="douyin")
    create(title="短标题", views=99, keywords=["baojie"], platform="kuaishou")

    charts = client.get("/dashboard/charts").json()

    assert charts["topVideos"][0]["title"] == "短标题"
    assert charts["topVideos"][1]["title"] == "家" * 20 + "..."
    assert charts["topKeywords"][0] == {"keyword": "baojie", "count": 2}
    assert {"name": "抖音", "value": 1, "platform": "douyin"} in charts["platformData"]
    assert {"name": "快手", "value": 1, "platform": "kuaishou"} in charts["platformData"]


def test_dashboard_kpis_and_comprehensive():
    create(title="a", views=1000, likes=50, comments=30, shares=20, conversionRate=12)
    create(title="b", views=1000)

    kpis = client.get("/dashboard/kpis").json()
    assert kpis["totalVideos"] == 2
    assert kpis["engagementRate"] == 5.0
    assert kpis["topVideo"]["title"] == "a"

    metrics = client.get("/dashboard/comprehensive").json()
    assert metrics["totalViews"] == 2000
    assert metrics["avgConversion"] == 12


# --- CHAT ---

@pytest.mark.parametrize("message", ["", "   "])
def test_chat_rejects_empty_message(message):
    response = client.post("/api/chat", json={"message": message})

    assert response.status_code == 400
    assert response.json()["detail"] == "消息不能为空"


def test_chat_json_mode_uses_body_records():
    videos = [
        {"title": "收纳技巧", "views": 100, "likes": 10, "keywords": ["收纳"]},
        {"title": "月嫂日常", "views": 300, "likes": 9},
    ]
    response = client.post("/api/chat", json={"message": "综合分析", "videos": videos, "stream": False})

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "fallback"
    assert body["videoCount"] == 2
    assert body["intent"] == "comprehensive_analysis"
    assert body["reply"] == generate_fallback_response("综合分析", videos)


def test_chat_reads_records_from_database_when_omitted():
    create(title="数据库里的视频", views=500)

    body = client.post("/api/chat", json={"message": "你好", "stream": False}).json()

    assert body["videoCount"] == 1


def test_chat_stream_frames():
    videos = [{"title": "保洁", "views": 100}]
    response = client.post("/api/chat", json={"message": "关键词", "videos": videos})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")

    frames = parse_sse(response.text)
    assert frames[0] == {"type": "start", "content": "正在分析您的需求...", "isComplete": False}

    chunks = frames[1:]
    assert all(f["type"] == "chunk" for f in chunks)
    assert chunks[-1]["isComplete"] is True
    assert "".join(f["content"] for f in chunks) == generate_fallback_response("关键词", videos)


# --- HOTSPOTS ---

def test_industry_hotspots():
    body = client.get("/api/industry-hotspots", params={"timeframe": "week"}).json()

    assert body["success"] is True
    assert [t["id"] for t in body["data"]["hotTopics"]] == ["4", "5", "6"]
    assert body["data"]["industryMetrics"]["marketSize"] == 10149
    assert len(body["data"]["industryMetrics"]["regionalData"]) == 5
    assert body["data"]["lastUpdated"]


def test_industry_hotspots_default_and_unknown_timeframe():
    default = client.get("/api/industry-hotspots").json()
    empty = client.get("/api/industry-hotspots", params={"timeframe": ""}).json()
    unknown = client.get("/api/industry-hotspots", params={"timeframe": "year"}).json()

    assert [t["timeframe"] for t in default["data"]["hotTopics"]] == ["today"] * 3
    assert [t["id"] for t in empty["data"]["hotTopics"]] == ["1", "2", "3"]
    assert unknown["data"]["hotTopics"] == []


# --- PAYMENTS ---

def test_payment_plans():
    plans = client.get("/api/wechat-pay/plans").json()

    assert [(p["planType"], p["amount"]) for p in plans] == [
        ("monthly", 199), ("quarterly", 499), ("yearly", 1999),
    ]


def test_payment_requires_all_parameters():
    response = client.post("/api/wechat-pay", json={"planType": "monthly", "amount": 199})

    assert response.status_code == 400
    assert response.json()["detail"] == "缺少必要参数"


def test_payment_mock_order():
    response = client.post(
        "/api/wechat-pay",
        json={"planType": "monthly", "amount": 199, "description": "月度版"},
    )

    assert response.status_code == 200
    order = response.json()
    assert order["out_trade_no"].startswith("ORDER_")
    assert order["package"].startswith("prepay_id=wx")
    assert order["signType"] == "MD5"
    assert order["code_url"].startswith("https://api.qrserver.com/")


def test_payment_notify_acknowledges():
    response = client.post("/api/wechat-pay/notify", content="<xml><return_code>SUCCESS</return_code></xml>")

    assert response.json() == {"return_code": "SUCCESS", "return_msg": "OK"}


# --- SETTINGS ---

def test_usage_accounting():
    client.post("/api/chat", json={"message": "你好", "videos": [], "stream": False})
    client.post("/api/chat", json={"message": "综合分析", "videos": []})

    logs = client.get("/api/settings/ai-logs", params={"page": 1, "limit": 10}).json()
    assert logs["total"] == 2
    assert all(entry["status"] == "fallback" for entry in logs["data"])

    kpis = client.get("/api/settings/kpis").json()
    assert kpis["total_requests"] == 2
    assert kpis["fallback_requests"] == 2
    assert kpis["llm_success_rate"] == 0
