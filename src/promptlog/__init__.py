"""
promptlog - leveled terminal output and interactive prompts.

Example:
    from promptlog import Logger, Level

    log = Logger(level=Level.VERBOSE)
    log.info("Starting")

    name = log.prompt("What is your name?", default_value="anonymous")
    if log.confirm(f"Deploy as {name}?", default_value=True):
        progress = log.progress("Deploying")
        deploy()
        progress.complete("Deployed")

    flavor = log.choose_one("Flavor?", ["vanilla", "mint", "chocolate"])
    toppings = log.choose_any("Toppings?", ["nuts", "sprinkles", "fudge"])
    tags = log.prompt_any("Tags?")
"""

from promptlog.config import LoggerConfig
from promptlog.errors import ConfigError, NoTerminalAttachedError, PromptLogError
from promptlog.levels import Level
from promptlog.logger import Logger
from promptlog.progress import Progress, ProgressAnimation, ProgressOptions
from promptlog.tui.theme import LogTheme

__version__ = "0.1.0"

__all__ = [
    # Logger
    "Logger",
    "Level",
    "LogTheme",
    # Progress
    "Progress",
    "ProgressAnimation",
    "ProgressOptions",
    # Config
    "LoggerConfig",
    # Errors
    "PromptLogError",
    "NoTerminalAttachedError",
    "ConfigError",
]
