"""Data contracts for the projection endpoints."""

from typing import Dict

from pydantic import BaseModel, Field

from backend.core.presentation import ChartSeries
from backend.models import ProjectionResult


class ProjectionResponse(BaseModel):
    """Projection rows plus the chart series and formatted headline figures."""

    result: ProjectionResult
    charts: ChartSeries
    summary: Dict[str, str] = Field(
        default_factory=dict,
        description="Currency-formatted retirement and end-of-life balances.",
    )
