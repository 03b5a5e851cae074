"""
Caller-owned topic registry.

Applications declare their topics once at startup and look them up by
label (for example when parsing ``--debug info error``). debugkit
defines no topics of its own beyond the catch-all convention, and
keeps no global registry: build one and pass it where it is needed.

Topic spec syntax accepted by parse_topic_spec():
    info        # a registered label
    4           # a bare level, unlabeled unless registered
    all         # the catch-all topic (unless 'all' is registered)
"""

from typing import Dict, Iterable, Iterator, List, Optional

from .errors import DecodeError, LevelOutOfRange, RegistryError, UnknownTopic
from .topic import Topic
from .topicset import TopicSet

CATCH_ALL_KEYWORD = "all"


class TopicRegistry:
    """Mapping from label to Topic, plus optional descriptions."""

    def __init__(self, topics: Iterable[Topic] = ()):
        self._by_label: Dict[str, Topic] = {}
        self._descriptions: Dict[str, str] = {}
        self.register_all(topics)

    def register(self, topic: Topic, description: str = "") -> Topic:
        """Add ``topic`` under its label.

        Re-registering the same topic under the same label is allowed
        (the description is replaced). Unlabeled topics and labels
        already bound to another level are rejected.
        """
        if not topic.label:
            raise RegistryError(
                f"Cannot register unlabeled topic at level {topic.level}")
        existing = self._by_label.get(topic.label)
        if existing is not None and existing.level != topic.level:
            raise RegistryError(
                f"Label '{topic.label}' is already bound to level {existing.level}")
        self._by_label[topic.label] = topic
        if description or topic.label not in self._descriptions:
            self._descriptions[topic.label] = description
        return topic

    def register_all(self, topics: Iterable[Topic]) -> None:
        for topic in topics:
            self.register(topic)

    def get(self, label: str) -> Optional[Topic]:
        return self._by_label.get(label)

    def lookup(self, label: str) -> Topic:
        """Like get(), but raises UnknownTopic listing the known labels."""
        topic = self._by_label.get(label)
        if topic is None:
            raise UnknownTopic(label, self.labels())
        return topic

    def by_level(self, level: int) -> Optional[Topic]:
        for topic in self._by_label.values():
            if topic.level == level:
                return topic
        return None

    def description(self, label: str) -> str:
        return self._descriptions.get(label, "")

    def labels(self) -> List[str]:
        """Registered labels in level order."""
        return [t.label for t in self]

    def __iter__(self) -> Iterator[Topic]:
        return iter(sorted(self._by_label.values(), key=lambda t: (t.level, t.label)))

    def __len__(self) -> int:
        return len(self._by_label)

    def __contains__(self, label) -> bool:
        return label in self._by_label

    def all_topics(self) -> TopicSet:
        """Mask of every registered topic (the catch-all only if registered)."""
        return TopicSet(self)

    def mask(self, specs: Iterable[str]) -> TopicSet:
        """Resolve topic specs into a mask."""
        return TopicSet(parse_topic_spec(spec, self) for spec in specs)

    def format_topic_list(self) -> str:
        """Format the registered topics for display."""
        lines = ["Available topics:"]
        if not self._by_label:
            return "\n".join(lines + ["  (none)"])
        width = max(len(label) for label in self._by_label)
        for topic in self:
            desc = self._descriptions.get(topic.label, "")
            lines.append(f"  {topic.label:<{width}}  {topic.level:>2}  {desc}".rstrip())
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, list]:
        return {"topics": [
            dict(t.to_dict(), description=self._descriptions.get(t.label, ""))
            for t in self
        ]}

    @classmethod
    def from_dict(cls, data: Dict[str, list]) -> "TopicRegistry":
        """Decode the ``{"topics": [...]}`` form written by to_dict().

        Entries go through Topic decoding, so bad levels raise
        DecodeError; unlabeled or conflicting entries raise RegistryError.
        """
        if not isinstance(data, dict) or not isinstance(data.get("topics"), list):
            raise DecodeError("topics", data, "expected an object with a topics array")
        registry = cls()
        for i, item in enumerate(data["topics"]):
            try:
                topic = Topic.from_dict(item)
            except DecodeError as e:
                raise DecodeError(f"topics[{i}].{e.field}", e.value, e.reason) from e
            registry.register(topic, item.get("description") or "")
        return registry


def parse_topic_spec(spec: str, registry: TopicRegistry) -> Topic:
    """Resolve a label, a decimal level or the catch-all keyword.

    Registered labels win over the keyword, so an application may
    relabel or override 'all'. A bare level resolves to the registered
    topic at that level when there is one.

    Raises:
        UnknownTopic: for unknown labels and out-of-range levels
    """
    spec = spec.strip()
    topic = registry.get(spec)
    if topic is not None:
        return topic
    if spec == CATCH_ALL_KEYWORD:
        return Topic.all()
    if spec.isascii() and spec.isdecimal():
        level = int(spec)
        try:
            return registry.by_level(level) or Topic(level)
        except LevelOutOfRange as e:
            raise UnknownTopic(spec, registry.labels()) from e
    raise UnknownTopic(spec, registry.labels())
