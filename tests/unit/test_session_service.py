"""
Dashboard session tests: one-time seeding, stale fetches and failure state.

Run with: pytest tests/unit/test_session_service.py -v
"""

import sys
from pathlib import Path

# Add src to path to simulate Lambda environment
SRC_PATH = Path(__file__).parent.parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from models.change import ChangeEvent  # noqa: E402
from services.session_service import DashboardSession, LoadStatus  # noqa: E402
from utils.error_handling import FetchFailure  # noqa: E402


class TestSeeding:
    def test_params_seed_once(self):
        session = DashboardSession("insights", {"category": "pain_point"})
        assert session.filters.get_dimension("category") == "pain_point"

        session.filters.set_dimension("category", "request")
        assert session.seed({"category": "issue"}) is False
        assert session.filters.get_dimension("category") == "request"


class TestFetchTracking:
    def test_stale_result_is_discarded(self):
        session = DashboardSession("conversations")
        first = session.begin_fetch()
        session.filters.set_dimension("type", "call")
        second = session.begin_fetch()
        assert first != second

        assert session.settle(first, [{"id": "old"}]) is False
        assert session.status is LoadStatus.LOADING
        assert session.rows == []

        assert session.settle(second, [{"id": "new"}]) is True
        assert session.status is LoadStatus.READY
        assert session.rows == [{"id": "new"}]

    def test_late_stale_result_cannot_overwrite(self):
        session = DashboardSession("conversations")
        first = session.begin_fetch()
        session.filters.set_dimension("type", "email")
        second = session.begin_fetch()
        session.settle(second, [{"id": "fresh"}])

        assert session.settle(first, [{"id": "stale"}]) is False
        assert session.rows == [{"id": "fresh"}]

    def test_failure_clears_rows(self):
        session = DashboardSession("customers")
        key = session.begin_fetch()
        session.settle(key, [{"id": "c1"}])

        key = session.begin_fetch()
        assert session.fail(key, FetchFailure("boom")) is True
        assert session.status is LoadStatus.FAILED
        assert session.rows == []
        assert session.error == "boom"

    def test_stale_failure_is_ignored(self):
        session = DashboardSession("customers")
        first = session.begin_fetch()
        session.filters.set_dimension("status", "active")
        second = session.begin_fetch()
        assert session.fail(first, "timeout") is False
        assert session.status is LoadStatus.LOADING
        assert session.pending_key == second

    def test_fetch_runs_fetcher_with_filters(self):
        session = DashboardSession("customers", {"status": "active"})
        seen = {}

        def fetcher(state):
            seen["status"] = state.get_dimension("status")
            return [{"id": "c1"}]

        assert session.fetch(fetcher) is LoadStatus.READY
        assert seen["status"] == "active"
        assert session.rows == [{"id": "c1"}]

    def test_fetch_failure_is_distinct_from_empty(self):
        def failing(state):
            raise FetchFailure("database unavailable", entity="customers")

        failed = DashboardSession("customers")
        assert failed.fetch(failing) is LoadStatus.FAILED
        assert failed.is_empty is False

        empty = DashboardSession("customers")
        assert empty.fetch(lambda state: []) is LoadStatus.READY
        assert empty.is_empty is True


class TestPushUpdates:
    def test_change_for_session_entity_is_merged(self):
        session = DashboardSession("insights")
        session.settle(session.begin_fetch(), [])
        session.apply_change(
            ChangeEvent(entity="insights", event_type="insert", record={"id": "i1", "text": "x"})
        )
        assert [row.id for row in session.rows] == ["i1"]

    def test_change_for_other_entity_is_ignored(self):
        session = DashboardSession("insights")
        session.apply_change(
            ChangeEvent(entity="customers", event_type="insert", record={"id": "c1"})
        )
        assert session.rows == []
