"""PostgreSQL data source using SQLAlchemy Core.

Query descriptors are translated into ``select()`` constructs so every
value is bound as a parameter; no SQL text is ever assembled from input.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    MetaData,
    String,
    Table,
    Text,
    and_,
    create_engine,
    desc,
    false,
    func,
    or_,
    select,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool

from config.settings import Settings
from models.conversation import Conversation
from models.customer import Customer
from models.filters import EntityType
from models.query import (
    AllOf,
    AnyOf,
    ArrayContains,
    Comparison,
    IsNull,
    Membership,
    Predicate,
    QueryDescriptor,
    TextMatch,
)
from models.stats import CategoryCount, TopicCount
from repositories.base import DataSource, to_models
from utils.error_handling import FetchFailure
from utils.logging_config import get_logger

logger = get_logger(__name__)

metadata = MetaData()

customers_table = Table(
    "customers",
    metadata,
    Column("id", String, primary_key=True),
    Column("name", Text),
    Column("industry", String),
    Column("size", String),
    Column("status", String),
    Column("tier", String),
    Column("health_score", Float),
    Column("health", String),
    Column("revenue", Float),
    Column("location", JSONB),
    Column("contact_person", Text),
    Column("email", String),
    Column("phone", String),
    Column("website", String),
    Column("join_date", DateTime(timezone=True)),
    Column("last_activity", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True)),
    Column("tags", ARRAY(Text)),
)

conversations_table = Table(
    "conversations",
    metadata,
    Column("id", String, primary_key=True),
    Column("customer_id", String),
    Column("type", String),
    Column("direction", String),
    Column("occurred_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True)),
    Column("duration_minutes", Float),
    Column("subject", Text),
    Column("summary", Text),
    Column("participants", JSONB),
    Column("status", String),
    Column("sentiment", String),
    Column("sentiment_score", Float),
    Column("priority", String),
    Column("tags", ARRAY(Text)),
)

insights_table = Table(
    "insights",
    metadata,
    Column("id", String, primary_key=True),
    Column("conversation_id", String),
    Column("customer_id", String),
    Column("category", String),
    Column("text", Text),
    Column("topics", ARRAY(Text)),
    Column("confidence_score", Float),
    Column("urgency_score", Float),
    Column("sentiment_score", Float),
    Column("potential_revenue", Float),
    Column("created_at", DateTime(timezone=True)),
)

TABLES = {
    EntityType.CUSTOMERS: customers_table,
    EntityType.CONVERSATIONS: conversations_table,
    EntityType.INSIGHTS: insights_table,
}

# Connection pooling for Lambda reuse.
_engine = None


def get_db_engine(settings: Settings) -> Optional[Engine]:
    """Get or create SQLAlchemy engine with connection pooling."""
    global _engine
    if _engine is None:
        db_url = settings.database_url
        if not db_url and settings.db_secret_arn:
            db_url = _secret_to_db_url(settings.db_secret_arn, settings.aws_region)
        if not db_url:
            logger.warning("No database URL configured")
            return None
        _engine = create_engine(
            db_url,
            poolclass=QueuePool,
            pool_size=1,
            max_overflow=2,
            pool_pre_ping=True,
            pool_recycle=300,
        )
    return _engine


def _secret_to_db_url(secret_arn: str, region: Optional[str] = None) -> Optional[str]:
    """Build a SQLAlchemy URL from an RDS secret."""
    try:
        sm = boto3.client("secretsmanager", region_name=region)
        secret = json.loads(sm.get_secret_value(SecretId=secret_arn)["SecretString"])
    except (BotoCoreError, ClientError, KeyError, ValueError) as exc:
        logger.warning("Failed to load DB secret", extra={"error": str(exc)})
        return None

    host = secret.get("host")
    port = secret.get("port", 5432)
    username = secret.get("username")
    password = secret.get("password")
    dbname = secret.get("dbname", "postgres")
    if not (host and username and password):
        return None
    return f"postgresql+psycopg2://{username}:{password}@{host}:{port}/{dbname}"


def to_clause(table: Table, predicate: Predicate) -> Any:
    """Translate one descriptor predicate into a SQLAlchemy expression."""
    if isinstance(predicate, AnyOf):
        return or_(*(to_clause(table, inner) for inner in predicate.predicates))
    if isinstance(predicate, AllOf):
        return and_(*(to_clause(table, inner) for inner in predicate.predicates))
    if not isinstance(predicate, (Comparison, Membership, TextMatch, ArrayContains, IsNull)):
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    column = table.c[predicate.column]
    if isinstance(predicate, IsNull):
        return column.is_(None)
    if isinstance(predicate, Comparison):
        if predicate.op == "eq":
            return column == predicate.value
        if predicate.op == "gte":
            return column >= predicate.value
        if predicate.op == "lte":
            return column <= predicate.value
        if predicate.op == "gt":
            return column > predicate.value
        return column < predicate.value
    if isinstance(predicate, Membership):
        if not predicate.values:
            return false()
        return column.in_(predicate.values)
    if isinstance(predicate, TextMatch):
        return column.icontains(predicate.term, autoescape=True)
    return column.contains([predicate.value])


def build_select(descriptor: QueryDescriptor):
    """``select()`` for a descriptor; top-level predicates are AND-ed."""
    table = TABLES[EntityType(descriptor.entity)]
    stmt = select(table)
    if descriptor.predicates:
        stmt = stmt.where(and_(*(to_clause(table, p) for p in descriptor.predicates)))
    order_column = table.c[descriptor.order_by]
    stmt = stmt.order_by(order_column.desc().nulls_last() if descriptor.descending else order_column)
    if descriptor.limit is not None:
        stmt = stmt.limit(descriptor.limit)
    return stmt


class PostgresDataSource(DataSource):
    """Reads customers, conversations and insights from PostgreSQL."""

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostgresDataSource":
        engine = get_db_engine(settings)
        if engine is None:
            raise FetchFailure("Database is not configured")
        return cls(engine)

    def _fetch_all(self, stmt, entity: Optional[str] = None) -> List[dict]:
        try:
            with self.engine.connect() as conn:
                return [dict(row._mapping) for row in conn.execute(stmt)]
        except SQLAlchemyError as exc:
            logger.error("Database query failed", extra={"entity": entity, "error": str(exc)})
            raise FetchFailure(f"Unable to load {entity or 'data'}", entity=entity) from exc

    def run(self, descriptor: QueryDescriptor) -> List[BaseModel]:
        entity = EntityType(descriptor.entity)
        records = self._fetch_all(build_select(descriptor), entity.value)
        logger.info(
            "Database query executed",
            extra={"entity": entity.value, "matched": len(records)},
        )
        return to_models(entity, records)

    def list_categories(self) -> List[CategoryCount]:
        count = func.count().label("count")
        stmt = (
            select(insights_table.c.category, count)
            .where(insights_table.c.category.is_not(None))
            .group_by(insights_table.c.category)
            .order_by(desc(count), insights_table.c.category)
        )
        rows = self._fetch_all(stmt, EntityType.INSIGHTS.value)
        return [CategoryCount(category=row["category"], count=row["count"]) for row in rows]

    def list_topics(self) -> List[TopicCount]:
        topic = func.unnest(insights_table.c.topics).label("topic")
        inner = select(topic).subquery()
        count = func.count().label("count")
        stmt = (
            select(inner.c.topic, count)
            .group_by(inner.c.topic)
            .order_by(desc(count), inner.c.topic)
        )
        rows = self._fetch_all(stmt, EntityType.INSIGHTS.value)
        return [TopicCount(topic=row["topic"], count=row["count"]) for row in rows]

    def _fetch_one(self, entity: EntityType, record_id: str) -> Optional[BaseModel]:
        table = TABLES[entity]
        records = self._fetch_all(select(table).where(table.c.id == record_id), entity.value)
        models = to_models(entity, records)
        return models[0] if models else None

    def get_customer(self, customer_id: str) -> Optional[Customer]:
        return self._fetch_one(EntityType.CUSTOMERS, customer_id)

    def get_conversation(self, conversation_id: str) -> Optional[Conversation]:
        return self._fetch_one(EntityType.CONVERSATIONS, conversation_id)
