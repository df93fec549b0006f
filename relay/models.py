"""
Pydantic models for the DSA Coach relay API.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from coach.models import ComplexityEstimate


class AnalyzeResponse(BaseModel):
    """Model reply plus the complexity pair parsed from it."""
    response: str = Field(..., description="Raw model text")
    complexity: ComplexityEstimate
    model: str = Field(..., description="Model used for the reply")
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Error response."""
    error: str = Field(..., description="Error category")
    message: str = Field(..., description="User-facing remediation or upstream error text")
    fallback: Optional[str] = Field(default=None, description="Canned coaching line to show instead")
