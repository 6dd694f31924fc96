"""
Report renderers.

Two interchangeable templates turn a RenderRequest into a CommandResult:
a public plain-text code block, or an ephemeral rich embed.
"""

from __future__ import annotations
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Protocol

from ..domain.models.report import CommandResult, Embed, Fact, RenderRequest

TITLE = "System Information"
DESCRIPTION = "Detailed system specifications and status"
ACCENT_COLOR = 0x2ECC71
SEPARATOR_LINE = "--- Additional Details ---"
SEPARATOR_FIELD = "━━━━━━━━━━━━━━━━━━━━"
LABEL_WIDTH = 18
FOOTER_FORMAT = "%b %d, %Y at %H:%M"


class Renderer(Protocol):
    def render(self, request: RenderRequest) -> CommandResult:
        ...


class PlainTextRenderer:
    """Monospace block suitable for a message everyone can see."""

    def __init__(self, label_width: int = LABEL_WIDTH):
        self.label_width = label_width

    def _lines(self, facts: Iterable[Fact]) -> List[str]:
        return [f"{fact.label.ljust(self.label_width)}: {fact.value}" for fact in facts]

    def render(self, request: RenderRequest) -> CommandResult:
        report = request.report
        out = [f"**{TITLE}**", "```"]
        out.extend(self._lines(report.basic))
        if request.detailed:
            out.append("")
            out.append(SEPARATOR_LINE)
            out.extend(self._lines(report.detailed))
        out.append("```")
        return CommandResult(content="\n".join(out), send=True)


class EmbedRenderer:
    """Rich embed with inline fields and a generation timestamp footer."""

    def __init__(self, color: int = ACCENT_COLOR, clock: Optional[Callable[[], datetime]] = None):
        self.color = color
        self._clock = clock or datetime.now

    def render(self, request: RenderRequest) -> CommandResult:
        report = request.report
        embed = Embed(title=TITLE, description=DESCRIPTION, color=self.color)

        for fact in report.basic:
            embed.add_field(fact.label, f"`{fact.value}`", inline=True)

        if request.detailed:
            embed.add_field("", SEPARATOR_FIELD, inline=False)
            for fact in report.detailed:
                embed.add_field(fact.label, f"`{fact.value}`", inline=True)

        embed.footer = f"Generated on {self._clock().strftime(FOOTER_FORMAT)}"
        return CommandResult(embeds=[embed], send=False)


def select_renderer(
    publish: bool,
    color: int = ACCENT_COLOR,
    clock: Optional[Callable[[], datetime]] = None,
) -> Renderer:
    if publish:
        return PlainTextRenderer()
    return EmbedRenderer(color=color, clock=clock)
