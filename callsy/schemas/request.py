from http import HTTPMethod
from pathlib import Path

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field


class RequestSpec(BaseModel):
    """Request description as written in the input document."""

    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., examples=["https://example.com/upload"])
    method: str = Field(..., examples=["post"])
    headers: dict[str, str | None] = Field(
        ...,
        examples=[{"content-type": "application/json", "content-length": None}],
    )
    body: str | None = Field(default=None, examples=['{"key": "value"}'])
    body_path: Path | None = Field(default=None, examples=["payload.json"])


class OutboundRequest(BaseModel):
    """Fully resolved request, ready to be sent."""

    url: AnyHttpUrl
    method: HTTPMethod
    headers: dict[str, str] = {}
    body: str = ""
