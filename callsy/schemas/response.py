from pydantic import BaseModel


class InboundResponse(BaseModel):
    """Response as received from the transport, before any decoding."""

    status_code: int
    headers: dict[str, bytes] = {}
    content: bytes = b""
    encoding: str | None = None  # charset declared by Content-Type


class OutputDocument(BaseModel):
    status_code: str
    headers: dict[str, str]
    body: str
