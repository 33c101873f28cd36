"""
Tests for rate limiting of the public view and like counters.
"""

import pytest

from inkfeed.config import config
from inkfeed.rate_limit import article_counter_key, get_counter_rate_limit, get_rate_limit, limiter


@pytest.fixture
def counter_limit_of_two():
    """Turn the limiter on with a tiny per-article budget."""
    original_limit = config.COUNTER_RATE_LIMIT_PER_MINUTE
    config.COUNTER_RATE_LIMIT_PER_MINUTE = 2
    limiter.enabled = True
    limiter.reset()

    yield

    limiter.reset()
    config.COUNTER_RATE_LIMIT_PER_MINUTE = original_limit
    # fast_settings restores limiter.enabled


class TestCounterRateLimit:
    """Tests for the per-article limit on GET /articles/{id} and likes."""

    def test_repeated_views_are_throttled(self, client_with_data, counter_limit_of_two):
        """The third view of one article within a minute gets 429."""
        client, data = client_with_data
        article_id = data["article_ids"][0]

        assert client.get(f"/articles/{article_id}").status_code == 200
        assert client.get(f"/articles/{article_id}").status_code == 200
        response = client.get(f"/articles/{article_id}")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "60"
        assert response.json()["retry_after"] == 60

    def test_throttled_view_is_not_counted(self, client_with_data, counter_limit_of_two):
        """A rejected request never reaches the counter."""
        client, data = client_with_data
        article_id = data["article_ids"][0]
        for _ in range(3):
            client.get(f"/articles/{article_id}")

        limiter.reset()
        assert client.get(f"/articles/{article_id}").json()["views"] == 3

    def test_limit_is_per_article(self, client_with_data, counter_limit_of_two):
        """Other articles keep their own budget."""
        client, data = client_with_data
        first, second = data["article_ids"]
        for _ in range(3):
            client.post(f"/articles/{first}/like")

        assert client.post(f"/articles/{first}/like").status_code == 429
        assert client.post(f"/articles/{second}/like").status_code == 200

    def test_feed_is_not_counter_limited(self, client_with_data, counter_limit_of_two):
        """Listing uses only the general budget."""
        client, data = client_with_data
        for _ in range(5):
            assert client.get("/articles").status_code == 200


class TestLimitStrings:
    """Tests for the configured limit values."""

    def test_non_positive_disables(self):
        original = config.COUNTER_RATE_LIMIT_PER_MINUTE
        config.COUNTER_RATE_LIMIT_PER_MINUTE = 0
        try:
            assert get_counter_rate_limit() == "1000000/minute"
        finally:
            config.COUNTER_RATE_LIMIT_PER_MINUTE = original

    def test_default_limit_format(self):
        assert get_rate_limit().endswith("/minute")


def test_counter_key_includes_article():
    """Requests for different articles land in different buckets."""
    class FakeRequest:
        def __init__(self, article_id):
            self.path_params = {"article_id": article_id}
            self.client = type("Client", (), {"host": "10.0.0.1"})()
            self.headers = {}

    assert article_counter_key(FakeRequest(1)) != article_counter_key(FakeRequest(2))
    assert article_counter_key(FakeRequest(1)).startswith("10.0.0.1")
