"""Domain models package."""

from .report import (
    CommandResult,
    DiskUsage,
    Embed,
    EmbedField,
    Fact,
    FallbackKind,
    MemoryStats,
    ProbeResult,
    RenderRequest,
    Report,
)

__all__ = [
    "CommandResult",
    "DiskUsage",
    "Embed",
    "EmbedField",
    "Fact",
    "FallbackKind",
    "MemoryStats",
    "ProbeResult",
    "RenderRequest",
    "Report",
]
