"""
Integration tests for the subscriptions API and subscription feed.
"""
from fastapi.testclient import TestClient

COOKING = {
    "authorId": "UC_cooking",
    "author": "Weeknight Kitchen",
    "authorThumbnails": [{"url": "https://img.example/ck-88.jpg", "width": 88, "height": 88}],
}
SYNTHWAVE = {"authorId": "UC_synthwave", "author": "Synthwave - Topic"}
MISSING = {"authorId": "UC_missing", "author": "Deleted Channel"}


class TestSubscriptionsAPI:
    def test_subscribe_and_list(self, test_client: TestClient):
        first = test_client.post("/v1/subscriptions", json=COOKING)
        again = test_client.post("/v1/subscriptions", json=COOKING)

        assert first.status_code == 201
        assert first.json() == {"subscribed": True}
        assert again.status_code == 200
        assert again.json() == {"subscribed": False}

        listing = test_client.get("/v1/subscriptions").json()
        assert len(listing) == 1
        assert listing[0]["id"] == "UC_cooking"
        assert listing[0]["thumbnail"] == "https://img.example/ck-88.jpg"
        assert listing[0]["subscribedAt"] > 0

    def test_subscribe_requires_channel_id(self, test_client: TestClient):
        response = test_client.post("/v1/subscriptions", json={"author": "Nameless"})
        assert response.status_code == 422

    def test_unsubscribe(self, test_client: TestClient):
        test_client.post("/v1/subscriptions", json=COOKING)

        assert test_client.delete("/v1/subscriptions/UC_cooking").status_code == 204

        missing = test_client.delete("/v1/subscriptions/UC_cooking")
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "NOT_FOUND"


class TestSubscriptionFeedAPI:
    def test_empty_feed(self, test_client: TestClient):
        response = test_client.get("/v1/subscriptions/feed")

        assert response.status_code == 200
        assert response.json() == {"items": [], "count": 0, "filtered_count": 0}

    def test_feed_skips_failing_channel(self, test_client: TestClient):
        for channel in (COOKING, SYNTHWAVE, MISSING):
            test_client.post("/v1/subscriptions", json=channel)

        response = test_client.get("/v1/subscriptions/feed")

        assert response.status_code == 200
        assert response.headers["Cache-Control"] == "private, max-age=30"
        data = response.json()
        assert data["count"] == 5
        assert {item["channelId"] for item in data["items"]} == {"UC_cooking", "UC_synthwave"}
        assert {item["videoId"] for item in data["items"]} == {"ck1", "ck2", "ck3", "sw1", "sw2"}

    def test_feed_limit(self, test_client: TestClient):
        test_client.post("/v1/subscriptions", json=COOKING)
        test_client.post("/v1/subscriptions", json=SYNTHWAVE)

        response = test_client.get("/v1/subscriptions/feed", params={"limit": 2})

        assert response.json()["count"] == 2

    def test_feed_limit_validation(self, test_client: TestClient):
        response = test_client.get("/v1/subscriptions/feed", params={"limit": 0})
        assert response.status_code == 422

    def test_feed_applies_content_filter(self, test_client: TestClient):
        test_client.post("/v1/subscriptions", json=COOKING)
        test_client.put(
            "/v1/preferences/filter",
            json={"banShortForm": True, "shortFormThreshold": 60},
        )

        filtered = test_client.get("/v1/subscriptions/feed").json()
        unfiltered = test_client.get(
            "/v1/subscriptions/feed", params={"apply_filters": False}
        ).json()

        assert filtered["count"] == 2
        assert filtered["filtered_count"] == 1
        assert "ck3" not in {item["videoId"] for item in filtered["items"]}
        assert unfiltered["count"] == 3


class TestHealthAPI:
    def test_health(self, test_client: TestClient):
        assert test_client.get("/health").json() == {"status": "healthy"}

    def test_readiness(self, test_client: TestClient):
        test_client.post("/v1/subscriptions", json=COOKING)

        data = test_client.get("/health/ready").json()

        assert data["circuit_breakers"]["name"] == "channel_videos"
        assert data["circuit_breakers"]["open"] == []
        assert data["storage"] == "memory"
        assert data["subscriptions"] == 1
