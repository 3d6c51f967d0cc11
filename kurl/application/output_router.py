# application/output_router.py
from __future__ import annotations

from typing import BinaryIO, Optional, TextIO

from kurl.application.ports.http_transport import BuiltRequest, ResponseSnapshot
from kurl.application.trace_writer import TraceWriter

HOP_SEPARATOR = b"\n----------------------------------------\n"


def header_block(resp: ResponseSnapshot) -> bytes:
    lines = [resp.status_line]
    lines.extend(f"{name}: {value}" for name, value in resp.headers)
    # header values arrive latin-1 decoded from http.client
    return ("\n".join(lines) + "\n\n").encode("latin-1", errors="replace")


class OutputRouter:
    """
    Decides where each hop's metadata and body go.

    trace mode : request/response metadata -> diagnostic stream,
                 final body only -> output file or primary stream
    normal mode: header block of every hop -> primary stream,
                 body -> primary stream (every hop) or output file (final hop only)
    """

    def __init__(
        self,
        out: BinaryIO,
        diag: TextIO,
        trace: bool = False,
        head_only: bool = False,
        body_file: Optional[BinaryIO] = None,
    ):
        self._out = out
        self._trace = TraceWriter(diag) if trace else None
        self._head_only = head_only
        self._body_file = body_file
        self._file_written = False

    def on_request(self, request: BuiltRequest) -> None:
        if self._trace is not None:
            self._trace.request(request)

    def on_response(self, response: ResponseSnapshot, final: bool) -> None:
        if self._trace is not None:
            self._trace.response(response)
            if final:
                self._write_body(response, self._body_file or self._out)
            return

        self._out.write(header_block(response))
        self._out.flush()

        if self._body_file is None:
            self._write_body(response, self._out)
        elif final:
            self._write_body(response, self._body_file)

    def on_hop_boundary(self) -> None:
        if self._trace is not None:
            return
        self._out.write(HOP_SEPARATOR)
        self._out.flush()

    def _write_body(self, response: ResponseSnapshot, sink: BinaryIO) -> None:
        if self._head_only or response.body is None:
            return
        if sink is self._body_file:
            if self._file_written:
                return
            self._file_written = True
        sink.write(response.body)
        sink.flush()
