"""
Base command interface for widgetlens CLI commands.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from ..pipeline import AnalysisPipeline
from ..services.configuration_service import WidgetLensConfig


@dataclass
class CommandContext:
    """Context passed to command handlers."""
    pipeline: AnalysisPipeline
    config: WidgetLensConfig
    args: Any  # argparse.Namespace


class BaseCommand(ABC):
    """Base class for all CLI commands."""

    def __init__(self, context: CommandContext):
        self.context = context
        self.pipeline = context.pipeline
        self.config = context.config
        self.args = context.args

    def read_source(self, path: str) -> Optional[str]:
        """Read a DSL file, printing the problem and returning None on failure."""
        try:
            return Path(path).read_text(encoding="utf-8")
        except OSError as e:
            print(f"❌ Cannot read {path}: {e}")
            return None

    @abstractmethod
    async def execute(self) -> int:
        """Execute the command.

        Returns:
            Exit code (0 for success)
        """
        pass

    @classmethod
    @abstractmethod
    def add_arguments(cls, parser):
        """Add command-specific arguments to the parser."""
        pass

    @classmethod
    @abstractmethod
    def help(cls) -> str:
        """Return help text for the command."""
        pass
