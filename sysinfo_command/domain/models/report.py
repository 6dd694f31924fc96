"""
Domain models for system reports.
Pure data carriers with no platform access.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar
from enum import Enum


T = TypeVar("T")


class FallbackKind(Enum):
    """How a probe degraded when its primary source failed."""
    PLATFORM = "platform"          # less specific platform-reported equivalent
    SENTINEL = "sentinel"          # fixed "Unknown" / "Not available" string
    SAFE_DEFAULT = "safe_default"  # boolean safe default (root detection)


@dataclass(frozen=True)
class ProbeResult(Generic[T]):
    """Value returned by a probe, optionally tagged with why it degraded."""
    value: T
    fallback: Optional[FallbackKind] = None
    reason: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.fallback is not None

    @classmethod
    def ok(cls, value: T) -> ProbeResult[T]:
        return cls(value=value)

    @classmethod
    def platform(cls, value: T, reason: str) -> ProbeResult[T]:
        return cls(value=value, fallback=FallbackKind.PLATFORM, reason=reason)

    @classmethod
    def sentinel(cls, value: T, reason: str) -> ProbeResult[T]:
        return cls(value=value, fallback=FallbackKind.SENTINEL, reason=reason)

    @classmethod
    def safe_default(cls, value: T, reason: str) -> ProbeResult[T]:
        return cls(value=value, fallback=FallbackKind.SAFE_DEFAULT, reason=reason)


@dataclass(frozen=True)
class Fact:
    """A single labelled line of the report. Values are always preformatted strings."""
    label: str
    value: str


@dataclass(frozen=True)
class Report:
    """Ordered basic and detailed facts for one command invocation."""
    basic: Tuple[Fact, ...]
    detailed: Tuple[Fact, ...] = ()
    degraded: Tuple[str, ...] = ()

    @property
    def facts(self) -> Tuple[Fact, ...]:
        """Basic facts followed by detailed ones, in display order."""
        return self.basic + self.detailed

    def as_dict(self) -> Dict[str, str]:
        return {fact.label: fact.value for fact in self.facts}


@dataclass(frozen=True)
class RenderRequest:
    """Input flags plus the assembled report, consumed once by a renderer."""
    publish: bool
    detailed: bool
    report: Report


@dataclass(frozen=True)
class MemoryStats:
    total: int
    available: int

    @property
    def used(self) -> int:
        return self.total - self.available


@dataclass(frozen=True)
class DiskUsage:
    """Filesystem totals in bytes; `free` is the space available to unprivileged users."""
    total: int
    free: int

    @property
    def used(self) -> int:
        return self.total - self.free


@dataclass
class EmbedField:
    name: str
    value: str
    inline: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass
class Embed:
    """Rich message payload handed to the chat client."""
    title: str
    description: str
    color: int
    fields: List[EmbedField] = field(default_factory=list)
    footer: Optional[str] = None

    def add_field(self, name: str, value: str, inline: bool = True) -> None:
        self.fields.append(EmbedField(name=name, value=value, inline=inline))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "color": self.color,
            "fields": [f.to_dict() for f in self.fields],
        }
        if self.footer is not None:
            data["footer"] = {"text": self.footer}
        return data


@dataclass
class CommandResult:
    """What a command hands back to the message sink.

    Exactly one of `content` or `embeds` is set. `send` marks the result as
    visible to everyone rather than ephemeral.
    """
    content: Optional[str] = None
    embeds: Optional[List[Embed]] = None
    send: bool = False
