"""debugkit — topic-filtered diagnostic output.

Callers tag each message with a single topic drawn from a 64-slot
space and gate emission with a topic mask. Only messages whose topic
is in the active mask (or when the mask holds the catch-all topic)
are written to the sink.

Public API:
    BitFlag        — value with at most one bit set
    Topic          — named point in the 64-slot topic space
    TopicSet       — topic mask with catch-all fast path
    render         — deterministic message formatting
    Emitter        — mask-gated writer (dbg / dlog)
    TopicRegistry  — caller-owned label -> topic mapping
    trace          — function tracing decorator
"""

from debugkit._version import __version__, __app_name__
from debugkit.errors import (
    DebugKitError, InvalidRawValue, InvalidBitPattern, PositionOutOfRange,
    LevelOutOfRange, DecodeError, RegistryError, UnknownTopic,
)
from debugkit.bitflag import BitFlag
from debugkit.topic import Topic, TOPIC_WIDTH, CATCH_ALL_LEVEL
from debugkit.topicset import TopicSet
from debugkit.formatter import render, render_text, display_token
from debugkit.emitter import (
    Emitter, init_emitter, get_emitter,
    dbg, dbg_each, dbg_always, dlog, dlog_always,
)
from debugkit.registry import TopicRegistry, parse_topic_spec
from debugkit.trace import trace

__all__ = [
    "__version__", "__app_name__",
    "DebugKitError", "InvalidRawValue", "InvalidBitPattern", "PositionOutOfRange",
    "LevelOutOfRange", "DecodeError", "RegistryError", "UnknownTopic",
    "BitFlag", "Topic", "TOPIC_WIDTH", "CATCH_ALL_LEVEL", "TopicSet",
    "render", "render_text", "display_token",
    "Emitter", "init_emitter", "get_emitter",
    "dbg", "dbg_each", "dbg_always", "dlog", "dlog_always",
    "TopicRegistry", "parse_topic_spec", "trace",
]
