from typing import Any, NamedTuple, Optional


class Outcome(NamedTuple):
    """Result of one external call: a value, or ``None`` plus the reason it is missing."""

    value: Any = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def empty(cls, reason: str) -> "Outcome":
        return cls(None, reason)
