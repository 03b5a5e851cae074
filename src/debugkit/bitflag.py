"""
BitFlag — an unsigned fixed-width value with at most one bit set.

A BitFlag is either "no flag" (raw value 0) or "flag at position p"
(raw value 1 << p). Its position is the number of trailing zero bits
of the raw value, so the zero value maps to the sentinel position
``width``, one past the last valid index.

Construction paths:
    BitFlag(raw)                     — checked, raises InvalidRawValue
    BitFlag.try_from_raw(v)          — checked, raises InvalidRawValue
    BitFlag.try_from_position(p)     — checked, raises PositionOutOfRange
    BitFlag.from_raw_unchecked(v)    — trusted, AssertionError on violation
    BitFlag.from_position_unchecked(p)
"""

from dataclasses import dataclass
from typing import Any, Dict

from .errors import DecodeError, InvalidRawValue, PositionOutOfRange

DEFAULT_WIDTH = 64


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _valid_raw(value: int, width: int) -> bool:
    return 0 <= value < (1 << width) and value.bit_count() <= 1


@dataclass(frozen=True)
class BitFlag:
    """Immutable value with ``popcount(raw) <= 1``."""
    raw: int = 0
    width: int = DEFAULT_WIDTH

    def __post_init__(self):
        if not _is_int(self.raw) or not _valid_raw(self.raw, self.width):
            raise InvalidRawValue(self.raw, self.width)

    # -- checked constructors -------------------------------------------

    @classmethod
    def zero(cls, width: int = DEFAULT_WIDTH) -> "BitFlag":
        """A value with no bits set."""
        return cls(0, width)

    @classmethod
    def try_from_raw(cls, value: int, width: int = DEFAULT_WIDTH) -> "BitFlag":
        return cls(value, width)

    @classmethod
    def try_from_position(cls, position: int,
                          width: int = DEFAULT_WIDTH) -> "BitFlag":
        if not _is_int(position) or not 0 <= position < width:
            raise PositionOutOfRange(position, width)
        return cls(1 << position, width)

    # -- trusted constructors -------------------------------------------

    @classmethod
    def from_raw_unchecked(cls, value: int,
                           width: int = DEFAULT_WIDTH) -> "BitFlag":
        """Construct from a raw value the caller has already validated.

        Raises AssertionError if ``value`` has more than one bit set.
        """
        if not _valid_raw(value, width):
            raise AssertionError(
                f"Invalid value {value}. Value {value} has more than one bit set.")
        return cls(value, width)

    @classmethod
    def from_position_unchecked(cls, position: int,
                                width: int = DEFAULT_WIDTH) -> "BitFlag":
        """Construct from a bit position the caller has already validated.

        Raises AssertionError if ``position`` is outside [0, width-1].
        """
        if not 0 <= position < width:
            raise AssertionError(
                f"Invalid position {position}. Position must be in range 0..<{width}")
        return cls(1 << position, width)

    # -- accessors ------------------------------------------------------

    @property
    def is_zero(self) -> bool:
        return self.raw == 0

    @property
    def position(self) -> int:
        """Position of the set bit, or ``width`` when no bit is set."""
        if self.raw == 0:
            return self.width
        return (self.raw & -self.raw).bit_length() - 1

    # -- persistence ----------------------------------------------------

    def to_dict(self) -> Dict[str, int]:
        return {"value": self.raw}

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  width: int = DEFAULT_WIDTH) -> "BitFlag":
        """Decode ``{"value": raw}`` (or the ``{"position": raw}`` form).

        Both keys carry the raw value, not a bit index. The popcount
        invariant is re-validated; violations raise DecodeError naming
        the field.
        """
        if not isinstance(data, dict):
            raise DecodeError("value", data, "expected an object")
        key = "value" if "value" in data else "position"
        if key not in data:
            raise DecodeError("value", None, "missing field")
        value = data[key]
        if not _is_int(value):
            raise DecodeError(key, value, "expected an unsigned integer")
        try:
            return cls(value, width)
        except InvalidRawValue as e:
            raise DecodeError(key, value, str(e)) from e
