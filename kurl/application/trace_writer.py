# application/trace_writer.py
from __future__ import annotations

from typing import TextIO

from kurl.application.ports.http_transport import BuiltRequest, ResponseSnapshot


class TraceWriter:
    """Wire-level request/response metadata, curl -v style, on the diagnostic stream."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def request(self, req: BuiltRequest) -> None:
        lines = [
            f"> {req.method} {req.path} {req.version}",
            f"> Host: {req.host}",
        ]
        lines.extend(f"> {name}: {value}" for name, value in req.headers)
        lines.append(">")
        self._write(lines)

    def response(self, resp: ResponseSnapshot) -> None:
        lines = [f"< {resp.status_line}"]
        lines.extend(f"< {name}: {value}" for name, value in resp.headers)
        lines.append("<")
        self._write(lines)

    def _write(self, lines) -> None:
        self._stream.write("\n".join(lines) + "\n")
        self._stream.flush()
