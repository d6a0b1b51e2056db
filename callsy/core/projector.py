from callsy.exceptions import BodyDecodeError
from callsy.schemas.response import InboundResponse, OutputDocument


def header_text(raw: bytes) -> str:
    """Header value as text, or "" when it is not visible ASCII."""
    if all(b == 0x09 or 0x20 <= b <= 0x7E for b in raw):
        return raw.decode("ascii")
    return ""


def project(response: InboundResponse) -> OutputDocument:
    headers = {
        name.lower(): header_text(value) for name, value in response.headers.items()
    }
    try:
        body = response.content.decode(response.encoding or "utf-8")
    except (UnicodeDecodeError, LookupError) as e:
        raise BodyDecodeError(e) from e
    return OutputDocument(
        status_code=str(response.status_code),
        headers=headers,
        body=body,
    )
