"""
Topic — a named point in the 64-slot topic space.

A topic is identified solely by its level (a bit position); the label
is cosmetic. Two topics with the same level and different labels are
equal and interchangeable in every set operation.

Level ``CATCH_ALL_LEVEL`` (the top slot, 63) is reserved by convention
for the catch-all topic: a TopicSet holding any topic at that level
matches every topic. Topic itself places no meaning on it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .bitflag import BitFlag, _is_int
from .errors import DecodeError, LevelOutOfRange

TOPIC_WIDTH = 64
CATCH_ALL_LEVEL = TOPIC_WIDTH - 1


@dataclass(frozen=True)
class Topic:
    """Immutable diagnostic topic.

    Usage::

        INFO = Topic(0, "info")
        CLICK = Topic(4)            # unlabeled, renders as "4"
    """
    level: int
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not _is_int(self.level) or not 0 <= self.level < TOPIC_WIDTH:
            raise LevelOutOfRange(self.level, TOPIC_WIDTH)
        if self.label is not None and not isinstance(self.label, str):
            raise TypeError(f"Topic label must be str or None, not {type(self.label).__name__}")

    @classmethod
    def from_flag(cls, flag: BitFlag, label: Optional[str] = None) -> "Topic":
        """Derive a topic from a BitFlag position.

        A zero flag (sentinel position ``width``) and flags of any other
        width are rejected.
        """
        if flag.is_zero or flag.width != TOPIC_WIDTH:
            raise LevelOutOfRange(flag.position, TOPIC_WIDTH)
        return cls(flag.position, label)

    @classmethod
    def all(cls, label: Optional[str] = "all") -> "Topic":
        """The conventional catch-all topic."""
        return cls(CATCH_ALL_LEVEL, label)

    @property
    def flag(self) -> BitFlag:
        return BitFlag.from_position_unchecked(self.level, TOPIC_WIDTH)

    @property
    def is_catch_all(self) -> bool:
        return self.level == CATCH_ALL_LEVEL

    @property
    def display(self) -> str:
        """Label if present, else the decimal level."""
        return self.label if self.label is not None else str(self.level)

    def __str__(self):
        return self.display

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "label": self.label}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Topic":
        if not isinstance(data, dict):
            raise DecodeError("topic", data, "expected an object")
        if "level" not in data:
            raise DecodeError("level", None, "missing field")
        level = data["level"]
        if not _is_int(level):
            raise DecodeError("level", level, "expected an integer")
        if not 0 <= level < TOPIC_WIDTH:
            raise DecodeError(
                "level", level,
                f"value must be in the range 0..<{TOPIC_WIDTH}")
        label = data.get("label")
        if label is not None and not isinstance(label, str):
            raise DecodeError("label", label, "expected a string or null")
        return cls(level, label)
