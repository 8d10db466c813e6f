"""Summary statistics shown on the stats cards."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class Stats(BaseModel):
    """Generic reduction over a working set."""

    total: int = 0
    breakdown: Dict[str, int] = Field(default_factory=dict)
    average: float = 0.0
    top: Optional[str] = None
    recent: int = 0


class CustomerStats(BaseModel):
    total_customers: int = 0
    active_customers: int = 0
    total_revenue: float = 0.0
    avg_revenue: float = 0.0
    at_risk_customers: int = 0


class ConversationStats(BaseModel):
    total: int = 0
    completed: int = 0
    scheduled: int = 0
    avg_duration: float = 0.0


class InsightStats(BaseModel):
    total_insights: int = 0
    unique_customers: int = 0
    top_category: Optional[str] = None
    recent_insights: int = 0


class CategoryCount(BaseModel):
    category: str
    count: int


class TopicCount(BaseModel):
    topic: str
    count: int


class DashboardKpis(BaseModel):
    """Headline numbers for the dashboard landing page."""

    active_customers: int = 0
    total_calls: int = 0
    total_insights: int = 0
    insights_by_category: List[CategoryCount] = Field(default_factory=list)
