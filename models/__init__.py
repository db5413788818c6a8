"""Public re-exports of all model types."""

from models.request import SimplifyRequest, ViewportModel
from models.response import ErrorResponse, SimplifyResponse

__all__ = [
    # Request
    "SimplifyRequest",
    "ViewportModel",
    # Response
    "SimplifyResponse",
    "ErrorResponse",
]
