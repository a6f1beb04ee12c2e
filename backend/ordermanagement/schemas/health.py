"""
Response bodies of the health endpoints and the API root.

These stay snake_case; only the order, product and customer resources use
camelCase on the wire.
"""

from datetime import datetime
from typing import Dict, Optional, Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness answer; returned whenever the process can serve requests."""
    status: Literal["ok"] = Field(
        description="Always \"ok\""
    )
    timestamp: datetime = Field(
        description="Server time (UTC)"
    )


class HealthCheckDetail(BaseModel):
    """
    Outcome of one dependency probe.

    Attributes:
        healthy: Probe succeeded
        latency_ms: Wall time spent in the probe
        error: Reason shown to operators when the probe failed
    """
    healthy: bool
    latency_ms: Optional[float] = Field(
        default=None,
        description="Probe duration in milliseconds"
    )
    error: Optional[str] = None


class ReadinessResponse(BaseModel):
    """
    Readiness answer.

    ``status`` is ``ready`` only when every entry in ``checks`` is healthy;
    the endpoint then answers 200, otherwise 503.
    """
    status: Literal["ready", "not_ready"]
    checks: Dict[str, HealthCheckDetail] = Field(
        description="Probe results keyed by dependency (currently only \"db\")"
    )
    timestamp: datetime = Field(
        description="Server time (UTC)"
    )


class ServiceInfo(BaseModel):
    """Response model for the API root."""
    service: str
    version: str
    docs: str
    health: str
