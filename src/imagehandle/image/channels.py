"""
Response channels

display() writes two headers and a body to a channel, then closes it.
"""

from typing import BinaryIO, Dict, List, Protocol


class ResponseChannel(Protocol):
    def send_header(self, name: str, value: str) -> None:
        ...

    def write(self, data: bytes) -> None:
        ...

    def close(self) -> None:
        ...


class StreamChannel:
    """
    CGI-style response on a binary stream.

    Headers are written as "Name: value" lines followed by a blank line
    before the first body byte. With terminate=True, close() ends the
    process by raising SystemExit(0) once the stream is flushed.
    """

    def __init__(self, stream: BinaryIO, terminate: bool = False):
        self.stream = stream
        self.terminate = terminate
        self._headers_done = False

    def send_header(self, name: str, value: str) -> None:
        if self._headers_done:
            raise RuntimeError("Headers already sent")
        self.stream.write(f"{name}: {value}\r\n".encode("latin-1"))

    def _end_headers(self) -> None:
        if not self._headers_done:
            self.stream.write(b"\r\n")
            self._headers_done = True

    def write(self, data: bytes) -> None:
        self._end_headers()
        self.stream.write(data)

    def close(self) -> None:
        self._end_headers()
        self.stream.flush()
        if self.terminate:
            raise SystemExit(0)


class BufferedChannel:
    """Collects headers and body in memory, e.g. to build a framework response"""

    def __init__(self):
        self.headers: Dict[str, str] = {}
        self._chunks: List[bytes] = []
        self.closed = False

    def send_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def write(self, data: bytes) -> None:
        if self.closed:
            raise RuntimeError("Channel is closed")
        self._chunks.append(data)

    def close(self) -> None:
        self.closed = True

    @property
    def body(self) -> bytes:
        return b"".join(self._chunks)
