"""System info command plugin"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Tuple

from sysinfo_command.application.report_service import ReportService
from sysinfo_command.domain.interfaces.host_info import HostInfoProvider
from sysinfo_command.domain.models.report import CommandResult, RenderRequest
from sysinfo_command.infrastructure.config.settings import get_settings
from sysinfo_command.infrastructure.host.local import LocalHostInfoProvider
from sysinfo_command.presentation.renderers import ACCENT_COLOR, select_renderer

logger = logging.getLogger(__name__)

COMMAND_SCHEMA = {
    "type": "command",
    "command": {
        "name": "system-info",
        "description": "Get detailed system information",
        "parameters": {
            "type": "object",
            "properties": {
                "send": {
                    "type": "boolean",
                    "description": "Send result visible to everyone",
                    "default": False
                },
                "detailed": {
                    "type": "boolean",
                    "description": "Show additional technical details",
                    "default": False
                }
            },
            "required": []
        }
    }
}


def make_host_provider() -> HostInfoProvider:
    return LocalHostInfoProvider(get_settings().host)


def build_result(
    host: HostInfoProvider,
    send: bool = False,
    detailed: bool = False,
    su_paths: Optional[Tuple[str, ...]] = None,
    color: int = ACCENT_COLOR,
    clock: Optional[Callable[[], datetime]] = None,
) -> CommandResult:
    """Probe the host, assemble the report and render it for the requested audience."""
    report = ReportService(host, su_paths=su_paths).build(detailed=detailed)
    request = RenderRequest(publish=send, detailed=detailed, report=report)
    return select_renderer(send, color=color, clock=clock).render(request)


def system_info(send: bool = False, detailed: bool = False) -> CommandResult:
    settings = get_settings()
    logger.debug(f"system-info invoked (send={send}, detailed={detailed})")
    return build_result(
        make_host_provider(),
        send=send,
        detailed=detailed,
        su_paths=settings.host.su_path_list,
        color=settings.accent_color,
    )


COMMAND_IMPLEMENTATION = system_info
COMMAND_AUTHOR = "core"
COMMAND_VERSION = "1.0.0"
