"""
Exception taxonomy for debugkit.

Checked constructors and decoders raise these; emission never does.
The unchecked construction paths raise AssertionError instead, since
reaching them with bad input is a programming error, not bad data.
"""


class DebugKitError(Exception):
    """Base class for all debugkit errors."""


class InvalidRawValue(DebugKitError, ValueError):
    """A raw value has more than one bit set (or does not fit the width)."""

    def __init__(self, value, width=64):
        self.value = value
        self.width = width
        super().__init__(
            f"Invalid value {value}. Value must be either 0 or any other "
            f"{width}-bit unsigned value which has just one bit set."
        )


# Alias used when the offending value came from a bit pattern on the wire
InvalidBitPattern = InvalidRawValue


class PositionOutOfRange(DebugKitError, ValueError):
    """A bit position is outside [0, width-1]."""

    def __init__(self, position, width=64):
        self.position = position
        self.width = width
        super().__init__(
            f"Invalid position {position}. Position must be in range 0..<{width}"
        )


class LevelOutOfRange(DebugKitError, ValueError):
    """A topic level is outside [0, width-1]."""

    def __init__(self, level, width=64):
        self.level = level
        self.width = width
        super().__init__(
            f"Invalid level {level}. Level must be in range 0..<{width}"
        )


class DecodeError(DebugKitError, ValueError):
    """An external representation could not be decoded.

    Attributes:
        field: Name of the offending field (e.g. 'level', 'topics[2].label')
        value: The offending value as read
    """

    def __init__(self, field, value, reason):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot decode '{field}' ({value!r}): {reason}")


class RegistryError(DebugKitError, ValueError):
    """A topic cannot be registered (unlabeled, or label already taken)."""


class UnknownTopic(DebugKitError, KeyError):
    """A topic label or spec does not resolve in the registry."""

    def __init__(self, spec, available=()):
        self.spec = spec
        self.available = list(available)
        super().__init__(spec)

    def __str__(self):
        if self.available:
            return (f"Unknown topic '{self.spec}'. "
                    f"Available: {', '.join(self.available)}")
        return f"Unknown topic '{self.spec}'"
