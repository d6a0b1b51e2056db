from http import HTTPMethod
from pathlib import Path

import pytest

from callsy.core.normalizer import (
    normalize,
    resolve_body,
    resolve_headers,
    resolve_method,
    resolve_url,
)
from callsy.exceptions import (
    BodySourceUnreadable,
    ConflictingBodySource,
    InputIOError,
    InvalidMethod,
    InvalidUrl,
    UnresolvableHeader,
)
from callsy.schemas.request import RequestSpec


def _spec(**kwargs) -> RequestSpec:
    fields = {"url": "https://example.test/x", "method": "get", "headers": {}}
    fields.update(kwargs)
    return RequestSpec(**fields)


class TestBody:
    def test_inline_body(self) -> None:
        assert resolve_body(_spec(body="payload\n")) == "payload\n"

    def test_no_body(self) -> None:
        assert resolve_body(_spec()) == ""

    def test_body_file_byte_for_byte(self, tmp_path: Path) -> None:
        body_file = tmp_path / "body.txt"
        body_file.write_bytes("line one\r\nline two\n\n".encode("utf-8"))
        assert resolve_body(_spec(body_path=body_file)) == "line one\r\nline two\n\n"

    def test_both_sources_conflict(self, tmp_path: Path) -> None:
        with pytest.raises(ConflictingBodySource):
            resolve_body(_spec(body="a", body_path=tmp_path / "body.txt"))

    def test_conflict_reported_before_anything_else(self) -> None:
        spec = _spec(
            url="not a url",
            method="FETCH",
            headers={"x-unknown": None},
            body="a",
            body_path="missing.txt",
        )
        with pytest.raises(ConflictingBodySource):
            normalize(spec)

    def test_body_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(BodySourceUnreadable) as exc_info:
            resolve_body(_spec(body_path=tmp_path / "missing.txt"))
        assert isinstance(exc_info.value, InputIOError)
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert "body file" in str(exc_info.value)

    def test_body_file_not_utf8(self, tmp_path: Path) -> None:
        body_file = tmp_path / "body.bin"
        body_file.write_bytes(b"\xff\xfe\x00")
        with pytest.raises(BodySourceUnreadable) as exc_info:
            resolve_body(_spec(body_path=body_file))
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)


class TestMethod:
    @pytest.mark.parametrize("method", ["get", "GET", "Get"])
    def test_case_insensitive(self, method: str) -> None:
        assert resolve_method(method) is HTTPMethod.GET

    @pytest.mark.parametrize("method", ["post", "put", "delete", "patch", "head", "options"])
    def test_standard_methods(self, method: str) -> None:
        assert resolve_method(method).value == method.upper()

    @pytest.mark.parametrize("method", ["FETCH", "", "GE T", "GET\n", "gét"])
    def test_invalid(self, method: str) -> None:
        with pytest.raises(InvalidMethod) as exc_info:
            resolve_method(method)
        assert exc_info.value.method == method


class TestHeaders:
    def test_explicit_values_copied(self) -> None:
        headers = {"Accept": "text/plain", "X-Empty": ""}
        assert resolve_headers(headers, "") == headers

    def test_content_length_derived(self) -> None:
        assert resolve_headers({"content-length": None}, "hi") == {"content-length": "2"}

    def test_content_length_counts_utf8_bytes(self) -> None:
        assert resolve_headers({"content-length": None}, "héllo") == {"content-length": "6"}

    def test_content_length_empty_body(self) -> None:
        assert resolve_headers({"content-length": None}, "") == {"content-length": "0"}

    def test_content_length_lookup_case_insensitive_keeps_key(self) -> None:
        assert resolve_headers({"Content-Length": None}, "abc") == {"Content-Length": "3"}

    def test_case_variants_kept_apart(self) -> None:
        resolved = resolve_headers({"Content-Length": None, "content-length": "9"}, "abc")
        assert resolved == {"Content-Length": "3", "content-length": "9"}

    def test_unresolvable_header(self) -> None:
        with pytest.raises(UnresolvableHeader) as exc_info:
            resolve_headers({"Accept": "*/*", "Authorization": None}, "")
        assert exc_info.value.header == "Authorization"
        assert "Authorization" in str(exc_info.value)


class TestUrl:
    def test_valid(self) -> None:
        assert str(resolve_url("https://example.test/x?q=1")) == "https://example.test/x?q=1"

    @pytest.mark.parametrize(
        "url", ["", "not a url", "/relative/path", "ftp://example.test/x", "http://"]
    )
    def test_invalid(self, url: str) -> None:
        with pytest.raises(InvalidUrl) as exc_info:
            resolve_url(url)
        assert exc_info.value.details


def test_normalize_full_request() -> None:
    request = normalize(
        _spec(
            method="post",
            headers={"content-length": None, "content-type": "text/plain"},
            body="payload",
        )
    )
    assert str(request.url) == "https://example.test/x"
    assert request.method is HTTPMethod.POST
    assert request.headers == {"content-length": "7", "content-type": "text/plain"}
    assert request.body == "payload"


def test_normalize_body_file(tmp_path: Path) -> None:
    body_file = tmp_path / "body.json"
    body_file.write_text('{"a": 1}\n', encoding="utf-8")
    request = normalize(
        _spec(method="put", headers={"content-length": None}, body_path=body_file)
    )
    assert request.body == '{"a": 1}\n'
    assert request.headers == {"content-length": "9"}
