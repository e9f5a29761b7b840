"""
Command handlers for the widgetlens CLI.
"""
from .base import BaseCommand, CommandContext
from .analyze import AnalyzeCommand
from .tokens import TokensCommand
from .validate import ValidateCommand
from .components import ComponentsCommand
from .themes import ThemesCommand
from .serve import ServeCommand

__all__ = [
    'BaseCommand',
    'CommandContext',
    'AnalyzeCommand',
    'TokensCommand',
    'ValidateCommand',
    'ComponentsCommand',
    'ThemesCommand',
    'ServeCommand',
]

COMMAND_REGISTRY = {
    'analyze': AnalyzeCommand,
    'tokens': TokensCommand,
    'validate': ValidateCommand,
    'components': ComponentsCommand,
    'themes': ThemesCommand,
    'serve': ServeCommand,
}
