#!/usr/bin/env python3
"""
Command-line entry point for the system-info chat command.

Acts as a local dispatcher and message sink: parses the command options,
runs the command through the plugin manager and prints the rendered result.
"""

import argparse
import logging
import sys
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import after loading env vars to ensure proper configuration
from . import __version__
from .infrastructure.config.settings import get_settings
from .plugin_loader import CommandNotFoundError, get_manager, reload_plugins
from .utils import format_result, setup_logging


def main(argv=None):
    """Main entry point for the sysinfo CLI."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Report device and OS statistics as a chat message",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Ephemeral rich embed
  %(prog)s --send                   # Public plain-text block
  %(prog)s --send --detailed        # Include kernel, CPU and build details
  %(prog)s --detailed --json        # Embed payload as JSON
        """
    )

    parser.add_argument('--send',
                       action='store_true',
                       help='Send result visible to everyone (plain-text block)')
    parser.add_argument('--detailed',
                       action='store_true',
                       help='Show additional technical details')
    parser.add_argument('--command',
                       default='system-info',
                       help='Command to run (default: system-info)')
    parser.add_argument('--json',
                       action='store_true',
                       help='Print the result payload as JSON')
    parser.add_argument('--list',
                       action='store_true',
                       help='List registered commands and exit')
    parser.add_argument('--log-level',
                       default=settings.log_level,
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       help='Set logging level')
    parser.add_argument('--version',
                       action='version',
                       version=f'%(prog)s {__version__}')

    args = parser.parse_args(argv)

    setup_logging(args.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    if settings.command_paths:
        reload_plugins(additional_paths=settings.command_paths)
    manager = get_manager()

    if args.list:
        for plugin in manager.plugins:
            desc = plugin.schema["command"]["description"]
            print(f"{plugin.name:<20} {desc}")
        return 0

    try:
        result = manager.execute(args.command, send=args.send, detailed=args.detailed)
    except CommandNotFoundError:
        print(f"❌ Error: unknown command '{args.command}'", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    logger.debug(f"Command '{args.command}' returned send={result.send}")
    print(format_result(result, as_json=args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
