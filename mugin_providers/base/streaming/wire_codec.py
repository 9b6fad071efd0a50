"""Wire codec for the canonical event stream.

Frame format (server-sent-events compatible)::

    event: response.output_text.delta
    data: {"itemId":"msg_1","content":"Hel"}
    <blank line>

The payload is compact JSON on a single line; JSON escaping guarantees it
never contains a raw newline. Frames may arrive split at arbitrary byte
boundaries, so decoding is done by ``FrameDecoder``, which keeps the trailing
incomplete frame (and any incomplete UTF-8 sequence) until the next chunk.
"""
from __future__ import annotations

import codecs
import json
from typing import List, Optional, Union

from ..errors import EngineError, MalformedFrame
from .events import CanonicalEvent, event_from_frame

FRAME_SEPARATOR = "\n\n"
EVENT_FIELD = "event"
DATA_FIELD = "data"


def encode_event(event: CanonicalEvent) -> str:
    """Serialize one canonical event into one wire frame."""
    payload = json.dumps(event.to_data(), ensure_ascii=False, separators=(",", ":"))
    return f"{EVENT_FIELD}: {event.event}\n{DATA_FIELD}: {payload}{FRAME_SEPARATOR}"


def encode_event_bytes(event: CanonicalEvent) -> bytes:
    return encode_event(event).encode("utf-8")


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _parse_frame(frame: str) -> Optional[CanonicalEvent]:
    """Parse the text of a single frame (without its blank-line separator).

    Returns ``None`` for comment/keep-alive frames that carry no fields.
    """
    name: Optional[str] = None
    data_lines: List[str] = []
    for line in frame.split("\n"):
        if not line or line.startswith(":"):
            continue
        field_name, sep, value = line.partition(":")
        if not sep:
            raise MalformedFrame(message=f"Frame line without a field name: {line[:80]!r}", frame=frame)
        if value.startswith(" "):
            value = value[1:]
        if field_name == EVENT_FIELD:
            name = value
        elif field_name == DATA_FIELD:
            data_lines.append(value)
    if name is None and not data_lines:
        return None
    if name is None:
        raise MalformedFrame(message="Frame has no event line", frame=frame)
    if not data_lines:
        raise MalformedFrame(message=f"Frame '{name}' has no data line", frame=frame)
    text = "\n".join(data_lines)
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedFrame(message=f"Frame '{name}' payload is not valid JSON: {e}", frame=frame, raw=e) from e
    return event_from_frame(name, data)


class FrameDecoder:
    """Incremental decoder turning received chunks into canonical events.

    One decoder serves one response body. ``feed`` returns every complete
    event in the order it appears; ``flush`` must be called once the
    transport reports end of stream.

    A bad frame that follows good frames in the same chunk does not discard
    them: the good events are returned and the error is raised by the next
    ``feed`` or ``flush`` call.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._held_cr = ""
        self._utf8 = codecs.getincrementaldecoder("utf-8")()
        self._deferred: Optional[EngineError] = None

    @property
    def pending(self) -> str:
        """Text received but not yet forming a complete frame."""
        return self._buffer

    def feed(self, chunk: Union[bytes, str]) -> List[CanonicalEvent]:
        self._raise_deferred()
        if isinstance(chunk, (bytes, bytearray)):
            text = self._utf8.decode(bytes(chunk))
        else:
            text = chunk
        if not text:
            return []
        text = self._held_cr + text
        # A trailing CR may be the first half of a CRLF split across reads.
        self._held_cr = "\r" if text.endswith("\r") else ""
        if self._held_cr:
            text = text[:-1]
        self._buffer += _normalize_newlines(text)
        return self._drain()

    def flush(self) -> List[CanonicalEvent]:
        """Decode whatever remains at end of stream.

        Raises:
            MalformedFrame: when leftover bytes are not valid UTF-8 or the
                leftover text is not a parseable frame.
        """
        self._raise_deferred()
        try:
            tail = self._utf8.decode(b"", final=True)
        except UnicodeDecodeError as e:
            raise MalformedFrame(message="Stream ended inside a UTF-8 sequence", raw=e) from e
        self._buffer += _normalize_newlines(self._held_cr + tail)
        self._held_cr = ""
        events = self._drain()
        self._raise_deferred()
        rest, self._buffer = self._buffer, ""
        if rest.strip():
            event = _parse_frame(rest.strip("\n"))
            if event is not None:
                events.append(event)
        return events

    def _raise_deferred(self) -> None:
        if self._deferred is not None:
            error, self._deferred = self._deferred, None
            raise error

    def _drain(self) -> List[CanonicalEvent]:
        events: List[CanonicalEvent] = []
        while True:
            frame, sep, rest = self._buffer.partition(FRAME_SEPARATOR)
            if not sep:
                break
            self._buffer = rest
            try:
                event = _parse_frame(frame)
            except EngineError as e:
                if not events:
                    raise
                self._deferred = e
                break
            if event is not None:
                events.append(event)
        return events


def decode_frames(buffer: Union[bytes, str]) -> List[CanonicalEvent]:
    """Decode a complete buffer in one call."""
    decoder = FrameDecoder()
    events = decoder.feed(buffer)
    events.extend(decoder.flush())
    return events


__all__ = [
    "FRAME_SEPARATOR",
    "encode_event",
    "encode_event_bytes",
    "FrameDecoder",
    "decode_frames",
]
