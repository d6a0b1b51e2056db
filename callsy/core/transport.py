import abc

import requests

import callsy.settings as settings
from callsy.exceptions import BodyDecodeError, TransportError
from callsy.schemas.request import OutboundRequest
from callsy.schemas.response import InboundResponse


class Transport(abc.ABC):
    def send(self, request: OutboundRequest) -> InboundResponse:
        """Send one request and wait for the complete response."""
        raise NotImplementedError()


class RequestsTransport(Transport):
    """Transport backed by a single-use `requests` session."""

    def __init__(self, timeout: float | None = None, verify: bool = True):
        self.timeout = timeout
        self.verify = verify

    def send(self, request: OutboundRequest) -> InboundResponse:
        _check_distinct_header_names(request.headers)
        _check_header_encoding(request.headers)
        resp = requests.request(
            method=request.method.value,
            url=str(request.url),
            headers=request.headers,
            data=request.body.encode("utf-8"),
            timeout=self.timeout,
            verify=self.verify,
            stream=True,
        )
        with resp:
            try:
                content = resp.content
            except requests.RequestException as e:
                raise BodyDecodeError(e) from e
            return InboundResponse(
                status_code=resp.status_code,
                # http.client decodes header bytes as latin-1; undo it to get the raw value
                headers={k: v.encode("latin-1") for k, v in resp.headers.items()},
                content=content,
                encoding=_charset(resp.headers.get("content-type")),
            )


def _check_distinct_header_names(headers: dict[str, str]) -> None:
    seen: dict[str, str] = {}
    for name in headers:
        other = seen.setdefault(name.lower(), name)
        if other != name:
            raise TransportError(
                f"headers {other!r} and {name!r} differ only in case and cannot both be sent"
            )


def _check_header_encoding(headers: dict[str, str]) -> None:
    # http.client encodes names as ASCII and values as latin-1
    for name, value in headers.items():
        try:
            name.encode("ascii")
        except UnicodeEncodeError:
            raise TransportError(f"header name {name!r} is not ASCII") from None
        try:
            value.encode("latin-1")
        except UnicodeEncodeError:
            raise TransportError(
                f"value of header {name!r} cannot be encoded as latin-1"
            ) from None


def _charset(content_type: str | None) -> str | None:
    if not content_type:
        return None
    for param in content_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset":
            return value.strip().strip("\"'") or None
    return None


def get_transport() -> Transport:
    return RequestsTransport(timeout=settings.request_timeout, verify=settings.verify_tls)


def execute(request: OutboundRequest, transport: Transport | None = None) -> InboundResponse:
    """Issue exactly one request; no retries."""
    if transport is None:
        transport = get_transport()
    if settings.debug:
        print(f"Sending {request.method.value} {request.url}")
    try:
        response = transport.send(request)
    except requests.RequestException as e:
        raise TransportError(e) from e
    if settings.debug:
        print(f"Received status {response.status_code}")
    return response
