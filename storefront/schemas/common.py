# storefront/schemas/common.py
from typing import Literal

from sqlmodel import SQLModel


class ErrorResponse(SQLModel):
    """
    Envelope returned for every failed API call.
    """

    success: Literal[False] = False
    error: str


class HealthRead(SQLModel):
    """
    Liveness probe payload.
    """

    status: Literal["ok"] = "ok"
    uptime: float
