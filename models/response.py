"""Response models for the simplification endpoints."""

from typing import Optional

from pydantic import BaseModel


class SimplifyResponse(BaseModel):
    """Response body for the POST /simplify endpoint."""

    html: str
    source_node_count: int
    simplified_node_count: int
    original_html: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body returned when a simplification pass fails."""

    error: str
    detail: str
