"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import health_check` to work
when running tests, simulating the Lambda environment where code
is deployed from the src/ directory.
"""

import os
import sys
from pathlib import Path

import boto3
import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing.

    The src/ directory is added to simulate Lambda's import behavior,
    where the deployment package makes src/ the root of the package.
    """
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    # Add src/ for Lambda-style imports (from handlers import ...)
    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Ensure boto3 has offline-friendly defaults so tests do not require AWS access.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_SESSION_TOKEN", "test")
os.environ.setdefault("ENVIRONMENT", "dev")

# Local runs use the in-memory data source with client-side filtering.
os.environ.setdefault("DATA_SOURCE", "memory")
os.environ.setdefault("FILTER_MODE", "client")

# Create a default boto3 session so resources/clients do not error during import.
boto3.setup_default_session(region_name="eu-west-2")


@pytest.fixture
def records():
    """A small linked set of customers, conversations and insights."""
    from models.conversation import Conversation
    from models.customer import Customer
    from models.insight import Insight

    customers = [
        Customer(id="c1", name="Acme Corp", industry="SaaS", status="active", tier="pro",
                 health_score=72, revenue=48000, last_activity="2025-09-12"),
        Customer(id="c2", name="Globex Inc", industry="Finance", status="active", tier="enterprise",
                 health_score=91, revenue=120000, last_activity="2025-09-03"),
        Customer(id="c3", name="TechStart", industry="Technology", status="prospect", tier="free",
                 health_score=35, last_activity="2025-09-15"),
    ]
    conversations = [
        Conversation(id="conv1", customer_id="c1", type="call", occurred_at="2025-09-01T15:00:00Z",
                     created_at="2025-09-01T16:00:00Z", duration_minutes=45,
                     subject="Q3 Roadmap", summary="CRM integration is slow",
                     status="completed", sentiment_score=0.6, priority="high"),
        Conversation(id="conv2", customer_id="c2", type="email", occurred_at="2025-09-03T10:00:00Z",
                     created_at="2025-09-03T10:00:00Z", subject="Privacy inquiry",
                     summary="GDPR documentation requested", status="completed",
                     sentiment_score=0, priority="medium"),
        Conversation(id="conv3", customer_id="c1", type="call", occurred_at="2025-09-12T09:00:00Z",
                     created_at="2025-09-12T09:00:00Z", duration_minutes=15,
                     subject="Billing follow-up", summary="Invoice questions",
                     status="scheduled", sentiment_score=-0.4, priority="high"),
    ]
    insights = [
        Insight(id="i1", conversation_id="conv1", category="Pain Point",
                text="Integration with CRM is too slow.", topics=["CRM", "Integration"],
                urgency_score=7, confidence_score=0.9, created_at="2025-09-01T16:05:00Z"),
        Insight(id="i2", conversation_id="conv2", category="Request",
                text="Needs GDPR compliance documentation.", topics=["GDPR", "Compliance"],
                urgency_score=5, confidence_score=0.95, created_at="2025-09-03T10:05:00Z"),
        Insight(id="i3", conversation_id="conv3", category="Pain Point",
                text="Billing portal is confusing.", topics=["Billing"],
                urgency_score=4, confidence_score=0.7, created_at="2025-09-12T09:05:00Z"),
        Insight(id="i4", conversation_id="missing", category="Opportunity",
                text="Orphaned insight.", topics=[], created_at="2025-09-13T09:05:00Z"),
    ]
    return {"customers": customers, "conversations": conversations, "insights": insights}
