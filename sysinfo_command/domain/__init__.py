"""Domain layer - Report models and host ports with no platform dependencies."""

from .models.report import (
    CommandResult,
    Embed,
    EmbedField,
    Fact,
    FallbackKind,
    ProbeResult,
    RenderRequest,
    Report,
)

__all__ = [
    "CommandResult",
    "Embed",
    "EmbedField",
    "Fact",
    "FallbackKind",
    "ProbeResult",
    "RenderRequest",
    "Report",
]
