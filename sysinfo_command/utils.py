"""
Utility functions for the sysinfo command CLI.
"""

import json
import logging
import sys
from typing import Optional

from .domain.models.report import CommandResult, Embed

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt or DEFAULT_LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    # Reduce noise from third-party libraries unless debugging
    if level.upper() != "DEBUG":
        for name in ("psutil", "jsonschema"):
            logging.getLogger(name).setLevel(logging.WARNING)


def format_embed_text(embed: Embed) -> str:
    """Render an embed for a terminal: title, description, one line per field, footer."""
    lines = [embed.title, embed.description, ""]
    for f in embed.fields:
        if not f.name:
            lines.append(f.value)
            continue
        lines.append(f"{f.name}: {f.value.strip('`')}")
    if embed.footer:
        lines.append("")
        lines.append(embed.footer)
    return "\n".join(lines)


def format_result(result: CommandResult, as_json: bool = False) -> str:
    """Turn a CommandResult into text for the terminal sink."""
    if as_json:
        payload = {
            "content": result.content,
            "embeds": [e.to_dict() for e in result.embeds or []],
            "send": result.send,
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)
    if result.content is not None:
        return result.content
    return "\n\n".join(format_embed_text(e) for e in result.embeds or [])
