"""
PostgreSQL data source tests with a mocked engine.

Statements are compiled against the PostgreSQL dialect; no database is needed.

Run with: pytest tests/unit/test_postgres_repo.py -v
"""

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

# Add src to path to simulate Lambda environment
SRC_PATH = Path(__file__).parent.parent.parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from config.settings import Settings  # noqa: E402
from models.query import Membership, QueryDescriptor  # noqa: E402
from repositories import postgres_repo  # noqa: E402
from repositories.postgres_repo import (  # noqa: E402
    PostgresDataSource,
    build_select,
    customers_table,
    to_clause,
)
from services.filter_state import FilterState  # noqa: E402
from services.query_composer import compose  # noqa: E402
from utils.error_handling import FetchFailure  # noqa: E402


def _compile(stmt):
    return stmt.compile(dialect=postgresql.dialect())


def _engine_returning(rows):
    engine = MagicMock()
    conn = engine.connect.return_value.__enter__.return_value
    conn.execute.return_value = [SimpleNamespace(_mapping=row) for row in rows]
    return engine


class TestStatementBuilding:
    def test_unfiltered_select(self):
        sql = str(_compile(build_select(compose(FilterState.for_entity("customers")))))
        assert "FROM customers" in sql
        assert "WHERE" not in sql
        assert "ORDER BY customers.created_at DESC NULLS LAST" in sql

    def test_values_are_bound_parameters(self):
        state = FilterState.for_entity("customers")
        state.set_dimension("status", "active")
        state.add_search_term("Acme'; DROP TABLE customers; --")
        compiled = _compile(build_select(compose(state)))
        assert "DROP TABLE" not in str(compiled)
        assert "active" in compiled.params.values()

    def test_topics_use_array_containment(self):
        state = FilterState.for_entity("insights")
        state.add_search_term("CRM")
        state.add_search_term("Billing")
        compiled = _compile(build_select(compose(state)))
        sql = str(compiled)
        assert "@>" in sql
        assert " OR " in sql
        assert ["CRM"] in compiled.params.values()

    def test_limit(self):
        stmt = build_select(compose(FilterState.for_entity("insights"), limit=5))
        assert "LIMIT" in str(_compile(stmt))

    def test_empty_membership_is_false(self):
        clause = to_clause(customers_table, Membership("health", ()))
        assert "false" in str(clause.compile(dialect=postgresql.dialect())).lower()

    def test_health_label_falls_back_to_score_when_null(self):
        state = FilterState.for_entity("customers")
        state.set_dimension("health", "good")
        compiled = _compile(build_select(compose(state)))
        sql = str(compiled)
        assert "customers.health = " in sql
        assert "customers.health IS NULL" in sql
        assert "customers.health_score >= " in sql
        assert {"good", 60.0, 80.0} <= set(compiled.params.values())

    def test_sentiment_label_or_score_sign(self):
        state = FilterState.for_entity("conversations")
        state.set_dimension("sentiment", "neutral")
        sql = str(_compile(build_select(compose(state))))
        assert "conversations.sentiment IS NULL AND conversations.sentiment_score = " in sql
        assert " OR " in sql

    def test_unknown_predicate_type(self):
        with pytest.raises(TypeError):
            to_clause(customers_table, object())

    def test_descriptor_for_unknown_entity(self):
        with pytest.raises(ValueError):
            build_select(QueryDescriptor(entity="orders", table="orders"))


class TestDataSource:
    def test_rows_are_validated_into_models(self):
        engine = _engine_returning(
            [
                {"id": "c1", "name": "Acme Corp", "status": "active", "health_score": 72},
                {"id": "c2", "name": "Globex", "status": "paused", "health_score": 400},
            ]
        )
        customers = PostgresDataSource(engine).fetch_customers()
        assert [c.id for c in customers] == ["c1", "c2"]
        assert customers[0].health == "good"
        assert customers[1].status == "unknown"
        assert customers[1].health_score is None

    def test_database_errors_become_fetch_failures(self):
        engine = MagicMock()
        engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        with pytest.raises(FetchFailure) as exc_info:
            PostgresDataSource(engine).fetch_insights()
        assert exc_info.value.status_code == 502
        assert exc_info.value.entity == "insights"

    def test_vocabulary_lists(self):
        engine = _engine_returning([{"category": "pain_point", "count": 4}])
        categories = PostgresDataSource(engine).list_categories()
        assert categories[0].category == "pain_point"
        assert categories[0].count == 4

        engine = _engine_returning([{"topic": "CRM", "count": 2}])
        assert PostgresDataSource(engine).list_topics()[0].topic == "CRM"

    def test_get_customer_missing(self):
        assert PostgresDataSource(_engine_returning([])).get_customer("nope") is None


class TestEngine:
    def test_missing_configuration(self, monkeypatch):
        monkeypatch.setattr(postgres_repo, "_engine", None)
        with pytest.raises(FetchFailure):
            PostgresDataSource.from_settings(Settings(data_source="postgres"))

    @patch("repositories.postgres_repo.boto3")
    def test_secret_to_db_url(self, mock_boto3):
        mock_client = MagicMock()
        mock_boto3.client.return_value = mock_client
        mock_client.get_secret_value.return_value = {
            "SecretString": json.dumps(
                {"host": "db.local", "username": "app", "password": "pw", "dbname": "crm"}
            )
        }
        url = postgres_repo._secret_to_db_url("arn:secret", "eu-west-2")
        assert url == "postgresql+psycopg2://app:pw@db.local:5432/crm"

    @patch("repositories.postgres_repo.boto3")
    def test_incomplete_secret(self, mock_boto3):
        mock_boto3.client.return_value.get_secret_value.return_value = {
            "SecretString": json.dumps({"host": "db.local"})
        }
        assert postgres_repo._secret_to_db_url("arn:secret") is None

    @patch("repositories.postgres_repo.create_engine")
    def test_engine_is_created_once(self, mock_create_engine, monkeypatch):
        monkeypatch.setattr(postgres_repo, "_engine", None)
        settings = Settings(database_url="postgresql+psycopg2://u:p@h/db")
        first = postgres_repo.get_db_engine(settings)
        second = postgres_repo.get_db_engine(settings)
        assert first is second
        mock_create_engine.assert_called_once()
