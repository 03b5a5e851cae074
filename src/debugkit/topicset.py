"""
TopicSet — a topic mask with a catch-all fast path.

Members are unique by level. ``is_catch_all`` is derived from the
members (any member at CATCH_ALL_LEVEL) and recomputed after every
mutation; it is never set directly and never persisted.

When the catch-all is present, ``contains()`` answers True for every
topic without a member lookup.
"""

from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from .errors import DecodeError
from .topic import CATCH_ALL_LEVEL, Topic


class TopicSet:
    """Set of topics used as an emission mask.

    Usage::

        mask = TopicSet([ERROR, WARNING])
        mask.contains(ERROR)        # True
        mask.insert(Topic.all())
        mask.contains(INFO)         # True, catch-all
    """

    __slots__ = ("_members", "_catch_all")

    def __init__(self, topics: Iterable[Topic] = ()):
        self._members: Dict[int, Topic] = {}
        for topic in topics:
            self._members.setdefault(topic.level, topic)
        self._refresh()

    def _refresh(self) -> None:
        self._catch_all = CATCH_ALL_LEVEL in self._members

    @classmethod
    def _from_members(cls, members: Dict[int, Topic]) -> "TopicSet":
        result = cls()
        result._members = members
        result._refresh()
        return result

    # -- constructors ---------------------------------------------------

    @classmethod
    def empty(cls) -> "TopicSet":
        return cls()

    @classmethod
    def of(cls, topic: Topic) -> "TopicSet":
        return cls((topic,))

    @classmethod
    def from_iterable(cls, topics: Iterable[Topic]) -> "TopicSet":
        return cls(topics)

    @classmethod
    def catch_all(cls) -> "TopicSet":
        """A mask matching every topic."""
        return cls.of(Topic.all())

    # -- queries --------------------------------------------------------

    @property
    def is_catch_all(self) -> bool:
        return self._catch_all

    @property
    def is_catch_none(self) -> bool:
        return not self._members

    def contains(self, topic: Topic) -> bool:
        if self._catch_all:
            return True
        return topic.level in self._members

    def __contains__(self, topic: Topic) -> bool:
        return self.contains(topic)

    def member(self, topic: Topic) -> Optional[Topic]:
        """The stored member at ``topic``'s level (with its own label)."""
        return self._members.get(topic.level)

    def __iter__(self) -> Iterator[Topic]:
        return iter(list(self._members.values()))

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __eq__(self, other):
        if not isinstance(other, TopicSet):
            return NotImplemented
        return self._members.keys() == other._members.keys()

    __hash__ = None

    def copy(self) -> "TopicSet":
        return self._from_members(dict(self._members))

    def is_subset(self, other: "TopicSet") -> bool:
        return self._members.keys() <= other._members.keys()

    def is_superset(self, other: "TopicSet") -> bool:
        return self._members.keys() >= other._members.keys()

    def is_disjoint(self, other: "TopicSet") -> bool:
        return self._members.keys().isdisjoint(other._members.keys())

    # -- set algebra (new sets) -----------------------------------------

    def union(self, other: Iterable[Topic]) -> "TopicSet":
        result = self.copy()
        result.form_union(other)
        return result

    def intersection(self, other: Iterable[Topic]) -> "TopicSet":
        result = self.copy()
        result.form_intersection(other)
        return result

    def symmetric_difference(self, other: Iterable[Topic]) -> "TopicSet":
        result = self.copy()
        result.form_symmetric_difference(other)
        return result

    def difference(self, other: Iterable[Topic]) -> "TopicSet":
        result = self.copy()
        result.subtract(other)
        return result

    # -- mutation -------------------------------------------------------

    def insert(self, topic: Topic) -> Tuple[bool, Topic]:
        """Insert ``topic`` unless its level is present.

        Returns (inserted, member_after_insert); an existing member is
        kept along with its label.
        """
        existing = self._members.get(topic.level)
        if existing is not None:
            return False, existing
        self._members[topic.level] = topic
        self._refresh()
        return True, topic

    def update(self, topic: Topic) -> Optional[Topic]:
        """Insert or replace; returns the replaced member, if any."""
        previous = self._members.get(topic.level)
        self._members[topic.level] = topic
        self._refresh()
        return previous

    def remove(self, topic: Topic) -> Optional[Topic]:
        """Remove the member at ``topic``'s level; returns it, or None."""
        removed = self._members.pop(topic.level, None)
        self._refresh()
        return removed

    def form_union(self, other: Iterable[Topic]) -> None:
        for topic in other:
            self._members.setdefault(topic.level, topic)
        self._refresh()

    def form_intersection(self, other: Iterable[Topic]) -> None:
        keep = {topic.level for topic in other}
        self._members = {lvl: t for lvl, t in self._members.items() if lvl in keep}
        self._refresh()

    def form_symmetric_difference(self, other: Iterable[Topic]) -> None:
        incoming: Dict[int, Topic] = {}
        for topic in other:
            incoming.setdefault(topic.level, topic)
        for level, topic in incoming.items():
            if level in self._members:
                del self._members[level]
            else:
                self._members[level] = topic
        self._refresh()

    def subtract(self, other: Iterable[Topic]) -> None:
        for topic in other:
            self._members.pop(topic.level, None)
        self._refresh()

    # -- display --------------------------------------------------------

    def sorted(self):
        """Members ordered by level ascending."""
        return [self._members[lvl] for lvl in sorted(self._members)]

    def __str__(self):
        return "[" + ", ".join(t.display for t in self.sorted()) + "]"

    def __repr__(self):
        return f"TopicSet({self})"

    # -- persistence ----------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {"topics": [t.to_dict() for t in self.sorted()]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TopicSet":
        if not isinstance(data, dict):
            raise DecodeError("topics", data, "expected an object")
        if "topics" not in data:
            raise DecodeError("topics", None, "missing field")
        items = data["topics"]
        if not isinstance(items, list):
            raise DecodeError("topics", items, "expected an array")
        topics = []
        for i, item in enumerate(items):
            try:
                topics.append(Topic.from_dict(item))
            except DecodeError as e:
                raise DecodeError(f"topics[{i}].{e.field}", e.value, e.reason) from e
        return cls(topics)
