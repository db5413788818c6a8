"""SimplifyRequest Pydantic model with strict validation (extra=forbid)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ViewportModel(BaseModel):
    """Window size the snapshot was rendered in."""

    model_config = ConfigDict(extra="forbid")

    width: int = Field(gt=0)
    height: int = Field(gt=0)


class SimplifyRequest(BaseModel):
    """Incoming request body for the POST /simplify endpoint.

    Extra fields are rejected with a 422 response.
    """

    model_config = ConfigDict(extra="forbid")

    html: str = Field(min_length=1)
    pretty: bool = True
    viewport: Optional[ViewportModel] = None
    include_original: bool = False
