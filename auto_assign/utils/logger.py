"""
Logger structuré — Auto-Assign Action.

Configure un logging coloré (via Rich) avec niveaux par module, et fournit
le canal de diagnostic « debug » du runner GitHub Actions.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable

from rich.console import Console
from rich.logging import RichHandler

from auto_assign.config import get_settings

DebugSink = Callable[[str], None]

_configured = False


def setup_logging() -> None:
    """Configure le logging global une seule fois."""
    global _configured
    if _configured:
        return
    _configured = True

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    console = Console(stderr=True)
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)

    fmt = logging.Formatter("%(name)s — %(message)s")
    handler.setFormatter(fmt)

    root = logging.getLogger("auto_assign")
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Réduire le bruit des libs
    for lib in ("urllib3", "github"):
        logging.getLogger(lib).setLevel(logging.WARNING)


# ── Workflow commands GitHub Actions ────────

def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _running_in_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS", "").lower() == "true"


def _issue_command(command: str, message: str) -> None:
    sys.stdout.write(f"::{command}::{_escape_data(message)}\n")
    sys.stdout.flush()


def actions_debug(message: str) -> None:
    """Sink de diagnostic par défaut : log DEBUG + commande ::debug:: sur le runner."""
    logging.getLogger("auto_assign.debug").debug(message)
    if _running_in_actions():
        _issue_command("debug", message)


def actions_error(message: str) -> None:
    """Signale une erreur au runner (annotation ::error::)."""
    logging.getLogger("auto_assign").error(message)
    if _running_in_actions():
        _issue_command("error", message)
