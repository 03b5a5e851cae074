"""
Emitter — mask-gated writer for diagnostic lines.

The emit rule is: a line is written when ``mask.contains(topic)``.
A mask holding the catch-all topic matches everything; an empty mask
matches nothing. Filtered calls are pure no-ops.

Two entry shapes:
    dbg(topic, message)         — conditional, gated by the mask
    dbg_always(message)         — unconditional, catch-all topic by default

and their timestamped counterparts ``dlog`` / ``dlog_always``, which
put a local timestamp (and, for leveled forms, the bracketed topic
label) in the prefix and never write a label separator.

``message`` may be a string or a zero-argument callable. A callable is
invoked at most once, and only after the mask check has passed, so
expensive messages cost nothing when their topic is filtered out.

Sinks: any text or binary stream, or None to discard. Writes are
synchronous; flush is best-effort. No locking is done here: callers
sharing a sink between threads own the interleaving.

Usage::

    em = Emitter(mask=TopicSet([ERROR]))
    em.dbg(INFO, "All good")        # nothing
    em.dbg(ERROR, "Bang!")          # "debug-error: Bang!\\n" on stderr
"""

import io
import sys
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Union

from .formatter import (
    DEFAULT_LABEL_SEPARATOR, DEFAULT_MESSAGE_SEPARATOR, DEFAULT_PREFIX,
    DEFAULT_TERMINATOR, display_token, render_text,
)
from .topic import Topic
from .topicset import TopicSet

Message = Union[str, Callable[[], Any]]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


class _Unset:
    def __repr__(self):
        return "<unset>"


# Distinguishes "not given" from an explicit None (omit / discard)
_UNSET = _Unset()
# Resolved to sys.stderr at write time so redirected stderr is honoured
STDERR = "<stderr>"


def _evaluate(message: Message) -> str:
    value = message() if callable(message) else message
    return value if isinstance(value, str) else str(value)


def _is_text_stream(file) -> bool:
    return isinstance(file, io.TextIOBase) or hasattr(file, "encoding")


def _flush(file) -> None:
    """Flush ``file`` if it can be flushed; failures are ignored."""
    flush = getattr(file, "flush", None)
    if flush is None:
        return
    try:
        flush()
    except (OSError, ValueError):
        pass


def write_line(file, text: str) -> None:
    """Write ``text`` to ``file`` as UTF-8, then flush best-effort.

    None and closed sinks are no-ops. Text streams backed by a byte
    buffer (sys.stderr, open(..., 'w')) get the raw bytes on the
    buffer; buffer-less text streams (StringIO) get the text.
    """
    if file is None or getattr(file, "closed", False):
        return
    if _is_text_stream(file):
        buffer = getattr(file, "buffer", None)
        if buffer is None:
            file.write(text)
            _flush(file)
            return
        _flush(file)
        buffer.write(text.encode("utf-8"))
        _flush(buffer)
        return
    file.write(text.encode("utf-8"))
    _flush(file)


class Emitter:
    """Mask-gated diagnostic writer.

    Holds a default mask, sink and format settings; every method
    accepts per-call overrides for each of them.

    Args:
        mask: Default topic mask (None means empty: nothing passes)
        file: Sink; defaults to stderr, None discards
        prefix: Line prefix (empty or None writes nothing)
        label_separator: Written before the topic token; None omits both
        message_separator: Written before the message; None omits it
        terminator: Written last; None omits it
        clock: Zero-argument callable returning a datetime (for dlog)
    """

    def __init__(
        self,
        mask: Optional[TopicSet] = None,
        file: Any = STDERR,
        prefix: Optional[str] = DEFAULT_PREFIX,
        label_separator: Optional[str] = DEFAULT_LABEL_SEPARATOR,
        message_separator: Optional[str] = DEFAULT_MESSAGE_SEPARATOR,
        terminator: Optional[str] = DEFAULT_TERMINATOR,
        clock: Callable[[], datetime] = None,
    ):
        self.mask = mask if mask is not None else TopicSet.empty()
        self._file = file
        self.prefix = prefix
        self.label_separator = label_separator
        self.message_separator = message_separator
        self.terminator = terminator
        self.clock = clock or datetime.now

    @property
    def file(self):
        return sys.stderr if self._file is STDERR else self._file

    @file.setter
    def file(self, value):
        self._file = value

    # -- gating ---------------------------------------------------------

    def active(self, topic: Topic, mask: Optional[TopicSet] = None) -> bool:
        """Would a line on ``topic`` be written?

        Callers can use this to gate expensive work beyond the message.
        """
        effective = mask if mask is not None else self.mask
        return effective.contains(topic)

    # -- internals ------------------------------------------------------

    def _pick(self, value, default):
        return default if value is _UNSET else value

    def _sink(self, file):
        if file is _UNSET:
            return self.file
        return sys.stderr if file is STDERR else file

    def _write(self, topic, text, file, prefix, label_separator,
               message_separator, terminator):
        line = render_text(
            topic,
            prefix=self._pick(prefix, self.prefix),
            label_separator=self._pick(label_separator, self.label_separator),
            message_separator=self._pick(message_separator, self.message_separator),
            terminator=self._pick(terminator, self.terminator),
            message=text,
        )
        write_line(self._sink(file), line)

    def timestamp(self) -> str:
        """Current local time as 'YYYY-MM-DD HH:MM:SS.mmm'."""
        return self.clock().strftime(TIMESTAMP_FORMAT)[:-3]

    def _log_prefix(self, topic: Optional[Topic]) -> str:
        stamp = self.timestamp()
        if topic is None:
            return stamp
        token = display_token(topic)
        return f"{stamp} [{token}]" if token else stamp

    # -- conditional ----------------------------------------------------

    def dbg(self, topic: Topic, message: Message,
            *, mask: Optional[TopicSet] = None, file=_UNSET, prefix=_UNSET,
            label_separator=_UNSET, message_separator=_UNSET,
            terminator=_UNSET) -> None:
        """Write one line on ``topic`` if the mask contains it."""
        if not self.active(topic, mask):
            return
        self._write(topic, _evaluate(message), file, prefix, label_separator,
                    message_separator, terminator)

    def dbg_each(self, topics: Iterable[Topic], message: Message,
                 *, mask: Optional[TopicSet] = None, file=_UNSET, prefix=_UNSET,
                 label_separator=_UNSET, message_separator=_UNSET,
                 terminator=_UNSET) -> int:
        """Check each topic in list order and write a line for each match.

        The message is evaluated once, on the first match.

        Returns:
            Number of lines written.
        """
        text = None
        written = 0
        for topic in topics:
            if not self.active(topic, mask):
                continue
            if text is None:
                text = _evaluate(message)
            self._write(topic, text, file, prefix, label_separator,
                        message_separator, terminator)
            written += 1
        return written

    def dlog(self, topic: Topic, message: Message,
             *, mask: Optional[TopicSet] = None, file=_UNSET,
             message_separator=_UNSET, terminator=_UNSET) -> None:
        """Timestamped ``dbg``: prefix is '<timestamp> [<topic>]'."""
        if not self.active(topic, mask):
            return
        self._write(topic, _evaluate(message), file, self._log_prefix(topic),
                    None, message_separator, terminator)

    # -- unconditional --------------------------------------------------

    def dbg_always(self, message: Message, topic: Optional[Topic] = None,
                   *, file=_UNSET, prefix=_UNSET, label_separator=_UNSET,
                   message_separator=_UNSET, terminator=_UNSET) -> None:
        """Write one line regardless of the mask (catch-all topic by default)."""
        self._write(topic if topic is not None else Topic.all(),
                    _evaluate(message), file, prefix, label_separator,
                    message_separator, terminator)

    def dlog_always(self, message: Message, topic: Optional[Topic] = None,
                    *, file=_UNSET, message_separator=_UNSET,
                    terminator=_UNSET) -> None:
        """Timestamped line regardless of the mask.

        Without a topic the prefix is the bare timestamp.
        """
        self._write(topic if topic is not None else Topic.all(),
                    _evaluate(message), file, self._log_prefix(topic),
                    None, message_separator, terminator)


# =============================================================================
# Module-level singleton
# =============================================================================

_emitter: Optional[Emitter] = None


def init_emitter(mask: Optional[TopicSet] = None, file: Any = STDERR,
                 **settings: Any) -> Emitter:
    """Initialize the module-level Emitter singleton.

    Call once at program startup, after the mask has been resolved.
    ``settings`` are forwarded to Emitter (prefix, separators, clock).
    """
    global _emitter
    _emitter = Emitter(mask=mask, file=file, **settings)
    return _emitter


def get_emitter() -> Emitter:
    """Get the module-level Emitter, creating a default if needed."""
    global _emitter
    if _emitter is None:
        _emitter = Emitter()
    return _emitter


def dbg(topic: Topic, mask: Optional[TopicSet], message: Message, **kwargs) -> None:
    """Write ``message`` on ``topic`` if ``mask`` contains it.

    A ``mask`` of None falls back to the singleton's mask.
    """
    get_emitter().dbg(topic, message, mask=mask, **kwargs)


def dbg_each(topics: Iterable[Topic], mask: Optional[TopicSet],
             message: Message, **kwargs) -> int:
    """Apply ``dbg`` to each topic in list order."""
    return get_emitter().dbg_each(topics, message, mask=mask, **kwargs)


def dbg_always(message: Message, topic: Optional[Topic] = None, **kwargs) -> None:
    """Write ``message`` unconditionally."""
    get_emitter().dbg_always(message, topic, **kwargs)


def dlog(topic: Topic, mask: Optional[TopicSet], message: Message, **kwargs) -> None:
    """Timestamped ``dbg``."""
    get_emitter().dlog(topic, message, mask=mask, **kwargs)


def dlog_always(message: Message, topic: Optional[Topic] = None, **kwargs) -> None:
    """Timestamped ``dbg_always``."""
    get_emitter().dlog_always(message, topic, **kwargs)
