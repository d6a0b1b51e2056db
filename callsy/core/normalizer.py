import re
from http import HTTPMethod
from typing import Callable

import pydantic
from pydantic import AnyHttpUrl, TypeAdapter

from callsy.exceptions import (
    BodySourceUnreadable,
    ConflictingBodySource,
    InvalidMethod,
    InvalidUrl,
    UnresolvableHeader,
)
from callsy.schemas.request import OutboundRequest, RequestSpec

# RFC 9110 token characters
_TOKEN = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

_url_adapter = TypeAdapter(AnyHttpUrl)


def _content_length(body: str) -> str:
    return str(len(body.encode("utf-8")))


# Headers whose value can be computed when the input gives null, keyed by lowercased name.
AUTO_HEADERS: dict[str, Callable[[str], str]] = {
    "content-length": _content_length,
}


def resolve_body(spec: RequestSpec) -> str:
    if spec.body is not None and spec.body_path is not None:
        raise ConflictingBodySource()
    if spec.body_path is not None:
        try:
            # newline="" keeps the file byte-for-byte, trailing newlines included
            with open(spec.body_path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise BodySourceUnreadable(spec.body_path, e) from e
    if spec.body is not None:
        return spec.body
    return ""


def resolve_method(method: str) -> HTTPMethod:
    upper = method.upper()
    if not _TOKEN.fullmatch(upper):
        raise InvalidMethod(method)
    try:
        return HTTPMethod(upper)
    except ValueError:
        raise InvalidMethod(method) from None


def resolve_headers(headers: dict[str, str | None], body: str) -> dict[str, str]:
    """Fill in null header values.

    The lookup into `AUTO_HEADERS` is case-insensitive, but each header keeps
    the key it was given with, so entries differing only in case stay apart.
    """
    resolved = {}
    for name, value in headers.items():
        if value is not None:
            resolved[name] = value
            continue
        derive = AUTO_HEADERS.get(name.lower())
        if derive is None:
            raise UnresolvableHeader(name)
        resolved[name] = derive(body)
    return resolved


def resolve_url(url: str) -> AnyHttpUrl:
    try:
        return _url_adapter.validate_python(url)
    except pydantic.ValidationError as e:
        raise InvalidUrl(e.errors()[0]["msg"]) from e


def normalize(spec: RequestSpec) -> OutboundRequest:
    """Turn a request description into a fully specified outbound request.

    The body is resolved first, so a conflicting body source is reported
    whatever else is wrong with the description.
    """
    body = resolve_body(spec)
    method = resolve_method(spec.method)
    headers = resolve_headers(spec.headers, body)
    url = resolve_url(spec.url)
    return OutboundRequest(url=url, method=method, headers=headers, body=body)
