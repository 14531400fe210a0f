"""
Streaming multipart reader for image uploads.

The request body is fed to python-multipart chunk by chunk, and only as fast
as the caller reads the file. Headers of the file part are therefore known
before any of its bytes are accepted, and a rejected upload stops pulling
the body instead of buffering it.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import AsyncIterator

import python_multipart as multipart
from python_multipart.exceptions import FormParserError
from python_multipart.multipart import parse_options_header

from image_server.backend.app.domain.files.errors import MalformedUpload, UnexpectedFileField

logger = logging.getLogger(__name__)

# events queued by the parser callbacks
_HEADERS = "headers"
_DATA = "data"
_PART_END = "part_end"


def is_multipart(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type, _ = parse_options_header(content_type)
    return media_type == b"multipart/form-data"


class MultipartImageUpload:
    """
    Exposes the file part named ``field_name`` as an async readable.

    Any other file part, or a second file under ``field_name``, raises
    ``UnexpectedFileField``. Plain form fields are skipped.
    """

    def __init__(self, stream: AsyncIterator[bytes], content_type: str, field_name: str = "image") -> None:
        _, params = parse_options_header(content_type)
        boundary = params.get(b"boundary")
        if not boundary:
            raise MalformedUpload("Missing boundary in multipart.")

        self.field_name = field_name
        self.filename = ""
        self.content_type = ""
        self.bytes_received = 0

        self._stream = stream.__aiter__()
        self._events: deque[tuple[str, object]] = deque()
        self._pending = b""
        self._in_file = False
        self._file_seen = False
        self._exhausted = False

        self._header_field = b""
        self._header_value = b""
        self._part_headers: dict[bytes, bytes] = {}

        callbacks = {
            "on_part_begin": self._on_part_begin,
            "on_part_data": self._on_part_data,
            "on_part_end": self._on_part_end,
            "on_header_field": self._on_header_field,
            "on_header_value": self._on_header_value,
            "on_header_end": self._on_header_end,
            "on_headers_finished": self._on_headers_finished,
        }
        self._parser = multipart.MultipartParser(boundary, callbacks)

    # ---------- parser callbacks ----------
    def _on_part_begin(self) -> None:
        self._part_headers = {}

    def _on_part_data(self, data: bytes, start: int, end: int) -> None:
        self._events.append((_DATA, data[start:end]))

    def _on_part_end(self) -> None:
        self._events.append((_PART_END, None))

    def _on_header_field(self, data: bytes, start: int, end: int) -> None:
        self._header_field += data[start:end]

    def _on_header_value(self, data: bytes, start: int, end: int) -> None:
        self._header_value += data[start:end]

    def _on_header_end(self) -> None:
        self._part_headers[self._header_field.lower()] = self._header_value
        self._header_field = b""
        self._header_value = b""

    def _on_headers_finished(self) -> None:
        self._events.append((_HEADERS, self._part_headers))

    # ---------- body pulling ----------
    async def _pull(self) -> None:
        try:
            chunk = await self._stream.__anext__()
        except StopAsyncIteration:
            self._exhausted = True
            self._feed(None)
            return
        self.bytes_received += len(chunk)
        if chunk:
            self._feed(chunk)

    def _feed(self, chunk: bytes | None) -> None:
        try:
            if chunk is None:
                self._parser.finalize()
            else:
                self._parser.write(chunk)
        except FormParserError as e:
            raise MalformedUpload() from e

    async def _next_event(self) -> tuple[str, object] | None:
        while not self._events:
            if self._exhausted:
                return None
            await self._pull()
        return self._events.popleft()

    def _check_file_part(self, headers: dict[bytes, bytes]) -> bool:
        _, options = parse_options_header(headers.get(b"content-disposition", b""))
        if b"filename" not in options:
            return False
        name = options.get(b"name", b"").decode("latin-1")
        if name != self.field_name or self._file_seen:
            logger.warning("Unexpected file field %r in upload", name)
            raise UnexpectedFileField(name)
        self._file_seen = True
        self.filename = options[b"filename"].decode("utf-8", errors="replace")
        self.content_type = headers.get(b"content-type", b"").decode("latin-1").strip()
        return True

    # ---------- public api ----------
    async def open_file(self) -> bool:
        """Advance to the file part. False when the body carries none."""
        while True:
            event = await self._next_event()
            if event is None:
                return False
            kind, payload = event
            if kind == _HEADERS and self._check_file_part(payload):
                self._in_file = True
                return True

    async def read(self, size: int = -1) -> bytes:
        while not self._pending and self._in_file:
            event = await self._next_event()
            if event is None:
                raise MalformedUpload("Unexpected end of multipart body.")
            kind, payload = event
            if kind == _DATA:
                self._pending = payload
            elif kind == _PART_END:
                self._in_file = False

        if size is None or size < 0:
            size = len(self._pending)
        chunk, self._pending = self._pending[:size], self._pending[size:]
        return chunk

    async def finish(self) -> None:
        self._in_file = False
        self._pending = b""
        while True:
            event = await self._next_event()
            if event is None:
                return
            kind, payload = event
            if kind == _HEADERS:
                self._check_file_part(payload)
