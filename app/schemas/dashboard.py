"""
Dashboard metrics response schema.
"""

from pydantic import BaseModel, Field


class DashboardMetrics(BaseModel):
    """Aggregate CRM metrics shown on the dashboard."""

    total_customers: int = Field(..., ge=0, description="Number of customers")
    active_properties: int = Field(..., ge=0, description="Properties currently available")
    visits_this_month: int = Field(..., ge=0, description="Visits dated since the first of the month (UTC)")
    total_revenue: float = Field(..., ge=0, description="Sum of prices of sold properties")
    interactions_this_month: int = Field(..., ge=0, description="Interactions created since the first of the month")
    hot_leads: int = Field(..., ge=0, description="Customers with high priority")
    overdue_interactions: int = Field(..., ge=0, description="Open interactions with no recent update")
