# hf_inference/infrastructure/sse_decoder.py
# -----------------------------------------------------------------------------
# Incremental parser for `text/event-stream` bodies. Bytes are fed in whatever
# chunks the network delivers; complete messages are handed to a callback
# synchronously, in order, as soon as their terminating blank line arrives.
# -----------------------------------------------------------------------------

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

_EOL = re.compile(rb"\r\n|\r|\n")
_CR = 0x0D


@dataclass
class SseMessage:
    data: str = ""
    event: str = ""
    id: str = ""
    retry: Optional[int] = None


class SseDecoder:
    """
    Stateful `feed(chunk)` accumulator.

    Lines may end in `\\n`, `\\r` or `\\r\\n`, and a line (or a `\\r\\n` pair)
    may be split across chunks. Multi-line `data` fields are joined with
    `\\n`. A message is emitted on each blank line that follows at least one
    field; consecutive blank lines do not produce empty messages.
    """

    def __init__(
        self,
        on_message: Callable[[SseMessage], None],
        *,
        on_id: Optional[Callable[[str], None]] = None,
        on_retry: Optional[Callable[[int], None]] = None,
        on_comment: Optional[Callable[[str], None]] = None,
    ):
        self._on_message = on_message
        self._on_id = on_id
        self._on_retry = on_retry
        self._on_comment = on_comment

        self._buffer = bytearray()
        self._discard_lf = False
        self._reset_message()

    def _reset_message(self) -> None:
        self._data: List[str] = []
        self._event = ""
        self._id = ""
        self._retry: Optional[int] = None
        self._pending = False

    def feed(self, chunk: bytes) -> None:
        if not chunk:
            return
        buf = self._buffer
        buf.extend(chunk)

        pos = 0
        # A `\r` ended the previous chunk; a leading `\n` completes that `\r\n`
        if self._discard_lf and buf[0] == 0x0A:
            pos = 1
        self._discard_lf = False

        while True:
            match = _EOL.search(buf, pos)
            if match is None:
                break
            line = bytes(buf[pos:match.start()])
            pos = match.end()
            if pos == len(buf) and buf[pos - 1] == _CR:
                self._discard_lf = True
            self._process_line(line)

        del buf[:pos]

    def _process_line(self, raw: bytes) -> None:
        if not raw:
            self._dispatch()
            return

        line = raw.decode("utf-8", errors="replace")
        if line.startswith(":"):
            if self._on_comment is not None:
                self._on_comment(line[1:])
            return

        name, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if name == "data":
            self._data.append(value)
        elif name == "event":
            self._event = value
        elif name == "id":
            self._id = value
            if self._on_id is not None:
                self._on_id(value)
        elif name == "retry":
            if not (value.isascii() and value.isdigit()):
                return
            self._retry = int(value)
            if self._on_retry is not None:
                self._on_retry(self._retry)
        else:
            return
        self._pending = True

    def _dispatch(self) -> None:
        if not self._pending:
            return
        message = SseMessage(
            data="\n".join(self._data),
            event=self._event,
            id=self._id,
            retry=self._retry,
        )
        self._reset_message()
        self._on_message(message)
