"""
Filter state tests: dimensions, search terms, date bounds, chips and seeding.

Run with: pytest tests/unit/test_filter_state.py -v
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path to simulate Lambda environment
SRC_PATH = Path(__file__).parent.parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from models.filters import Dimension, EntityType  # noqa: E402
from services.filter_state import FilterState  # noqa: E402


class TestDimensions:
    """Discrete selections are keyed by the entity's allowed dimensions."""

    def test_allowed_dimensions_start_unset(self):
        state = FilterState.for_entity("customers")
        assert set(state.dimensions) == {
            Dimension.STATUS,
            Dimension.TIER,
            Dimension.HEALTH,
            Dimension.SIZE,
            Dimension.INDUSTRY,
        }
        assert state.active_dimensions() == {}
        assert state.is_empty

    def test_set_and_clear_dimension(self):
        state = FilterState.for_entity(EntityType.CUSTOMERS)
        assert state.set_dimension("status", "active") is True
        assert state.get_dimension("status") == "active"

        state.set_dimension("status", "all")
        assert state.get_dimension("status") is None
        state.set_dimension("status", "")
        assert state.get_dimension("status") is None

    def test_unsupported_dimension_is_rejected(self):
        state = FilterState.for_entity("customers")
        assert state.set_dimension("category", "pain_point") is False
        assert state.set_dimension("colour", "blue") is False
        assert state.is_empty

    def test_constructor_accepts_dimension_names(self):
        state = FilterState(entity="insights", dimensions={"category": "pain_point"})
        assert state.active_dimensions() == {Dimension.CATEGORY: "pain_point"}


class TestSearchTerms:
    """Search terms are an ordered, duplicate-free list."""

    def test_duplicate_term_is_noop(self):
        state = FilterState.for_entity("insights")
        state.add_search_term("CRM")
        state.add_search_term("Billing")
        before = list(state.search_terms)

        assert state.add_search_term("CRM") is False
        assert state.search_terms == before

    def test_blank_terms_are_ignored_and_terms_are_trimmed(self):
        state = FilterState.for_entity("insights")
        assert state.add_search_term("   ") is False
        assert state.add_search_term(None) is False
        state.add_search_term("  CRM ")
        assert state.search_terms == ["CRM"]

    def test_remove_term(self):
        state = FilterState.for_entity("insights")
        state.add_search_term("CRM")
        state.add_search_term("Billing")
        assert state.remove_search_term("CRM") is True
        assert state.search_terms == ["Billing"]
        assert state.remove_search_term("CRM") is False


class TestDateBoundsAndThresholds:
    def test_date_range_parses_bounds(self):
        state = FilterState.for_entity("conversations")
        state.set_date_range("2025-09-01", "2025-09-30T23:59:59Z")
        assert state.start == datetime(2025, 9, 1, tzinfo=timezone.utc)
        assert state.end == datetime(2025, 9, 30, 23, 59, 59, tzinfo=timezone.utc)

    def test_unparsable_bound_is_left_unset(self):
        state = FilterState.for_entity("conversations")
        state.set_date_range("not-a-date", None)
        assert state.start is None
        assert state.end is None

    def test_thresholds_only_apply_to_insights(self):
        customers = FilterState.for_entity("customers")
        customers.set_thresholds(min_urgency=5)
        assert customers.min_urgency is None

        insights = FilterState.for_entity("insights")
        insights.set_thresholds(min_urgency="5", min_confidence=0.8)
        assert insights.min_urgency == 5.0
        assert insights.min_confidence == 0.8

    def test_scopes(self):
        state = FilterState.for_entity("insights")
        assert state.set_scope("conversation_id", "conv1") is True
        assert state.set_scope("industry", "SaaS") is False
        assert state.scopes == {"customer_id": None, "conversation_id": "conv1"}


class TestWholeState:
    def _populated(self):
        state = FilterState.for_entity("conversations")
        state.set_dimension("status", "completed")
        state.set_dimension("type", "call")
        state.add_search_term("renewal")
        state.set_date_range("2025-09-01", "2025-09-15")
        state.set_scope("customer_id", "c1")
        return state

    def test_clear_all_resets_everything(self):
        state = self._populated()
        state.clear_all()
        assert state.is_empty
        assert state.search_terms == []
        assert state.start is None and state.end is None
        assert set(state.dimensions) == {
            Dimension.TYPE,
            Dimension.STATUS,
            Dimension.SENTIMENT,
            Dimension.PRIORITY,
        }

    def test_active_filter_chips(self):
        chips = self._populated().active_filters()
        labels = [chip.label for chip in chips]
        assert labels == [
            "Type: call",
            "Status: completed",
            "Start: 9/1/2025",
            "End: 9/15/2025",
            "renewal",
        ]

    def test_remove_filter_by_chip_key(self):
        state = self._populated()
        assert state.remove_filter("term:renewal") is True
        assert state.remove_filter("start") is True
        assert state.remove_filter("status") is True
        assert state.search_terms == []
        assert state.start is None
        assert state.get_dimension("status") is None
        assert state.get_dimension("type") == "call"

    def test_fingerprint_is_stable_and_state_sensitive(self):
        first = self._populated()
        second = self._populated()
        assert first.fingerprint() == second.fingerprint()
        assert first.fingerprint().startswith("conversations:")

        second.add_search_term("expansion")
        assert first.fingerprint() != second.fingerprint()


class TestSeeding:
    """Navigation parameters apply once per session."""

    def test_seed_applies_params(self):
        state = FilterState.for_entity("insights")
        seeded = state.seed_from_params(
            {
                "category": "pain_point",
                "search": "CRM, Billing",
                "date_from": "2025-09-01",
                "conversation_id": "conv1",
                "min_urgency": "6",
            }
        )
        assert seeded is True
        assert state.get_dimension("category") == "pain_point"
        assert state.search_terms == ["CRM", "Billing"]
        assert state.start == datetime(2025, 9, 1, tzinfo=timezone.utc)
        assert state.scopes["conversation_id"] == "conv1"
        assert state.min_urgency == 6.0

    def test_seed_only_once(self):
        state = FilterState.for_entity("conversations")
        state.seed_from_params({"type": "call"})
        state.set_dimension("type", "email")

        assert state.seed_from_params({"type": "chat"}) is False
        assert state.get_dimension("type") == "email"

    def test_empty_params_still_consume_the_seed(self):
        state = FilterState.for_entity("customers")
        assert state.seed_from_params(None) is False
        assert state.seed_from_params({"status": "active"}) is False
        assert state.get_dimension("status") is None
