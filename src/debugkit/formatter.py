"""
Message formatting.

Composition order, each step conditional:
    1. prefix             if non-empty
    2. label separator    if configured and the topic has a token to show
       + label token      label if present, else the decimal level
    3. message separator  if configured (independent of the message)
    4. message            if non-empty
    5. terminator         if configured

None means "omit entirely"; an empty string means "present but
contributes nothing". A label separator of None suppresses the label
token as well. A topic labelled "" has no token, so neither the
separator nor a token are written for it.

The output is the UTF-8 encoding of the concatenation; nothing is
escaped or truncated.
"""

from typing import Optional

from .topic import Topic

DEFAULT_PREFIX = "debug"
DEFAULT_LABEL_SEPARATOR = "-"
DEFAULT_MESSAGE_SEPARATOR = ": "
DEFAULT_TERMINATOR = "\n"


def display_token(topic: Topic) -> str:
    """Label if present (possibly empty), else the decimal level."""
    return topic.label if topic.label is not None else str(topic.level)


def render_text(topic: Topic,
                prefix: Optional[str] = DEFAULT_PREFIX,
                label_separator: Optional[str] = DEFAULT_LABEL_SEPARATOR,
                message_separator: Optional[str] = DEFAULT_MESSAGE_SEPARATOR,
                terminator: Optional[str] = DEFAULT_TERMINATOR,
                message: str = "") -> str:
    """Compose the diagnostic line for ``topic`` as text."""
    parts = []
    if prefix:
        parts.append(prefix)
    if label_separator is not None:
        token = display_token(topic)
        if token:
            parts.append(label_separator)
            parts.append(token)
    if message_separator is not None:
        parts.append(message_separator)
    if message:
        parts.append(message)
    if terminator is not None:
        parts.append(terminator)
    return "".join(parts)


def render(topic: Topic,
           prefix: Optional[str] = DEFAULT_PREFIX,
           label_separator: Optional[str] = DEFAULT_LABEL_SEPARATOR,
           message_separator: Optional[str] = DEFAULT_MESSAGE_SEPARATOR,
           terminator: Optional[str] = DEFAULT_TERMINATOR,
           message: str = "") -> bytes:
    """Compose the diagnostic line for ``topic`` as UTF-8 bytes."""
    return render_text(topic, prefix, label_separator, message_separator,
                       terminator, message).encode("utf-8")
