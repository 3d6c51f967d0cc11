from __future__ import annotations

import io

from fakes import response
from kurl.application.output_router import HOP_SEPARATOR, OutputRouter, header_block
from kurl.application.ports.http_transport import BuiltRequest

OK = response(200, headers=[("Content-Type", "text/plain"), ("X-A", "1")], body=b"hello")
MOVED = response(301, headers=[("Location", "/next")], body=b"moved")


def _request() -> BuiltRequest:
    return BuiltRequest(
        method="GET",
        url="http://example.com/a?b=1",
        path="/a?b=1",
        host="example.com",
        version="HTTP/1.1",
        headers=[("User-Agent", "kurl/test"), ("Accept", "*/*")],
    )


def test_header_block_format():
    assert header_block(OK) == b"HTTP/1.1 200 OK\nContent-Type: text/plain\nX-A: 1\n\n"


class TestNormalMode:
    def test_header_block_then_body(self):
        out, diag = io.BytesIO(), io.StringIO()
        router = OutputRouter(out, diag)
        router.on_request(_request())
        router.on_response(OK, final=True)
        assert out.getvalue() == header_block(OK) + b"hello"
        assert diag.getvalue() == ""

    def test_head_only_writes_no_body(self):
        out = io.BytesIO()
        router = OutputRouter(out, io.StringIO(), head_only=True)
        router.on_response(OK, final=True)
        assert out.getvalue() == header_block(OK)

    def test_every_hop_and_separator_on_stdout(self):
        out = io.BytesIO()
        router = OutputRouter(out, io.StringIO())
        router.on_response(MOVED, final=False)
        router.on_hop_boundary()
        router.on_response(OK, final=True)
        assert out.getvalue() == header_block(MOVED) + b"moved" + HOP_SEPARATOR + header_block(OK) + b"hello"

    def test_body_file_gets_final_body_only(self):
        out, body_file = io.BytesIO(), io.BytesIO()
        router = OutputRouter(out, io.StringIO(), body_file=body_file)
        router.on_response(MOVED, final=False)
        router.on_hop_boundary()
        router.on_response(OK, final=True)
        assert out.getvalue() == header_block(MOVED) + HOP_SEPARATOR + header_block(OK)
        assert body_file.getvalue() == b"hello"

    def test_body_file_written_at_most_once(self):
        body_file = io.BytesIO()
        router = OutputRouter(io.BytesIO(), io.StringIO(), body_file=body_file)
        router.on_response(OK, final=True)
        router.on_response(OK, final=True)
        assert body_file.getvalue() == b"hello"


class TestTraceMode:
    def test_metadata_goes_to_diag_only(self):
        out, diag = io.BytesIO(), io.StringIO()
        router = OutputRouter(out, diag, trace=True)
        router.on_request(_request())
        router.on_response(OK, final=True)

        assert out.getvalue() == b"hello"
        assert diag.getvalue().splitlines() == [
            "> GET /a?b=1 HTTP/1.1",
            "> Host: example.com",
            "> User-Agent: kurl/test",
            "> Accept: */*",
            ">",
            "< HTTP/1.1 200 OK",
            "< Content-Type: text/plain",
            "< X-A: 1",
            "<",
        ]

    def test_only_final_body_and_no_separator(self):
        out, diag = io.BytesIO(), io.StringIO()
        router = OutputRouter(out, diag, trace=True)
        router.on_response(MOVED, final=False)
        router.on_hop_boundary()
        router.on_response(OK, final=True)
        assert out.getvalue() == b"hello"
        assert "< HTTP/1.1 301 Moved Permanently" in diag.getvalue()

    def test_head_only_leaves_stdout_empty(self):
        out = io.BytesIO()
        router = OutputRouter(out, io.StringIO(), trace=True, head_only=True)
        router.on_response(OK, final=True)
        assert out.getvalue() == b""

    def test_final_body_goes_to_file(self):
        out, body_file = io.BytesIO(), io.BytesIO()
        router = OutputRouter(out, io.StringIO(), trace=True, body_file=body_file)
        router.on_response(OK, final=True)
        assert out.getvalue() == b""
        assert body_file.getvalue() == b"hello"
