"""Main CLI entry point for widgetlens using command pattern."""

import sys
import argparse
import asyncio
import logging
from typing import Optional

from .commands import COMMAND_REGISTRY, CommandContext
from .exceptions import ConfigurationError
from .pipeline import AnalysisPipeline
from .services.configuration_service import ConfigurationService


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="widgetlens",
        description="widgetlens - Widget DSL analysis: widgets, themes, layouts and components"
    )
    parser.add_argument(
        "--config",
        help="Path to a JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    # Create subparsers for commands
    subparsers = parser.add_subparsers(
        title="Available commands",
        dest="command",
        required=True
    )

    commands = dict(COMMAND_REGISTRY)
    for name, command_class in commands.items():
        subparser = subparsers.add_parser(name, help=command_class.help())
        command_class.add_arguments(subparser)

    return parser, commands


async def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser, commands = create_parser()
    args = parser.parse_args(argv)

    try:
        config = ConfigurationService(args.config).get_config()
    except ConfigurationError as e:
        print(f"❌ {e.to_user_message()}")
        return 1

    # Configure logging
    level = logging.DEBUG if args.verbose or config.debug_mode else config.log_level.upper()
    logging.basicConfig(
        level=level,
        format='%(message)s'
    )

    context = CommandContext(
        pipeline=AnalysisPipeline(config),
        config=config,
        args=args
    )

    # Execute command
    command_class = commands[args.command]
    command = command_class(context)

    try:
        return await command.execute()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 1
    except Exception as e:
        logging.error(f"❌ Unexpected error: {e}")
        import traceback
        traceback.print_exc()
        return 1


def cli_main():
    """Synchronous CLI entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli_main()
