"""
Utility tests: lenient parsers, the LRU cache, settings and error responses.

Run with: pytest tests/unit/test_utils.py -v
"""

import json
import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Add src to path to simulate Lambda environment
SRC_PATH = Path(__file__).parent.parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from config.settings import Settings  # noqa: E402
from utils.cache_service import LRUCache  # noqa: E402
from utils.error_handling import (  # noqa: E402
    FetchFailure,
    NotFoundError,
    ValidationError,
    to_response,
)
from utils.validators import (  # noqa: E402
    coerce_number,
    is_unset,
    normalize_choice,
    parse_timestamp,
)


class TestValidators:
    def test_parse_timestamp(self):
        utc = timezone.utc
        assert parse_timestamp("2025-09-12T10:30:00Z") == datetime(2025, 9, 12, 10, 30, tzinfo=utc)
        assert parse_timestamp("2025-09-12") == datetime(2025, 9, 12, tzinfo=utc)
        assert parse_timestamp(date(2025, 9, 12)) == datetime(2025, 9, 12, tzinfo=utc)
        assert parse_timestamp("-") is None
        assert parse_timestamp("not a date") is None
        assert parse_timestamp(12345) is None

    def test_normalize_choice(self):
        assert normalize_choice(" Active ", ["active", "inactive"]) == "active"
        assert normalize_choice("paused", ["active", "inactive"]) == "unknown"
        assert normalize_choice("", ["active"]) is None

    def test_is_unset(self):
        assert is_unset(None)
        assert is_unset("")
        assert is_unset(" All ")
        assert not is_unset("active")
        assert not is_unset(0)

    def test_coerce_number(self):
        assert coerce_number("4.5") == 4.5
        assert coerce_number(3) == 3.0
        assert coerce_number(True) is None
        assert coerce_number("n/a") is None


class TestLRUCache:
    def test_get_and_set(self):
        cache = LRUCache(max_size=2)
        cache.set("a", 1)
        assert cache.get("a") == 1
        assert cache.get("missing") is None
        assert cache.stats()["hits"] == 1
        assert cache.stats()["misses"] == 1

    def test_least_recently_used_is_evicted(self):
        cache = LRUCache(max_size=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.stats()["size"] == 2

    def test_expired_entries(self):
        cache = LRUCache(ttl_seconds=-1)
        cache.set("a", 1)
        assert cache.get("a") is None
        cache.set("b", [1])
        assert cache.transform("b", lambda rows: rows + [2]) == []

    def test_transform_rewrites_matching_keys(self):
        cache = LRUCache()
        cache.set("insights:all", [1])
        cache.set("customers:all", [9])
        touched = cache.transform("insights:", lambda rows: rows + [2])
        assert touched == ["insights:all"]
        assert cache.get("insights:all") == [1, 2]
        assert cache.get("customers:all") == [9]

    def test_transform_skips_listed_keys(self):
        cache = LRUCache()
        cache.set("insights:all", [1])
        cache.set("insights:abc", [1])
        cache.set("customers:abc", [1])
        touched = cache.transform("insights:", lambda rows: rows + [2], skip=("insights:all",))
        assert touched == ["insights:abc"]
        assert cache.get("insights:all") == [1]
        assert cache.get("insights:abc") == [1, 2]
        assert cache.get("customers:abc") == [1]

    def test_delete_and_clear(self):
        cache = LRUCache()
        cache.set("a", 1)
        assert cache.delete("a") is True
        assert cache.delete("a") is False
        cache.set("b", 2)
        cache.clear()
        assert cache.stats()["size"] == 0


class TestSettings:
    def test_defaults_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "dev")
        monkeypatch.setenv("DATA_SOURCE", "memory")
        monkeypatch.setenv("FILTER_MODE", "bogus")
        settings = Settings.from_environment()
        assert settings.data_source == "memory"
        assert settings.filter_mode == "client"
        assert settings.recent_window_days == 7

    def test_database_url_selects_postgres(self, monkeypatch):
        monkeypatch.delenv("DATA_SOURCE", raising=False)
        monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg2://u:p@h/db")
        settings = Settings.from_environment()
        assert settings.data_source == "postgres"
        assert settings.database_url == "postgresql+psycopg2://u:p@h/db"

    def test_server_filter_mode(self, monkeypatch):
        monkeypatch.setenv("FILTER_MODE", "SERVER")
        assert Settings.from_environment().filter_mode == "server"

    def test_prod_override(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("CACHE_MAX_SIZE", "50")
        assert Settings.from_environment().cache_max_size == 500


class TestErrorResponses:
    def test_not_found(self):
        response = to_response(NotFoundError("Customer not found"))
        assert response["statusCode"] == 404
        assert json.loads(response["body"]) == {"message": "Customer not found", "status": "error"}

    def test_validation(self):
        assert to_response(ValidationError())["statusCode"] == 422

    def test_fetch_failure_names_entity(self):
        response = to_response(FetchFailure("Unable to load insights", entity="insights"))
        body = json.loads(response["body"])
        assert response["statusCode"] == 502
        assert body["status"] == "failed"
        assert body["entity"] == "insights"
