"""
Point d'entrée CLI — Auto-Assign Action.

Usage (dans un job GitHub Actions) :
  python -m auto_assign
  python -m auto_assign --config-path .github/reviewers.yml --json-output
"""

from __future__ import annotations

import asyncio
import sys

import click
from rich.console import Console
from rich.panel import Panel

from auto_assign.config import get_settings
from auto_assign.handler import run_action
from auto_assign.models import AssignResult
from auto_assign.utils.helpers import describe_error
from auto_assign.utils.logger import actions_error, setup_logging

console = Console()


@click.command()
@click.option("--config-path", "-c", default=None, help="Fichier de configuration dans le repo")
@click.option("--event-path", "-e", default=None, help="Payload JSON de l'événement (GITHUB_EVENT_PATH)")
@click.option("--repository", "-r", default=None, help="Repository (owner/repo)")
@click.option("--json-output", is_flag=True, help="Sortie JSON brute")
def main(config_path: str | None, event_path: str | None,
         repository: str | None, json_output: bool) -> None:
    """Auto-Assign — ajoute reviewers et assignees à la Pull Request."""
    setup_logging()

    settings = get_settings()
    if config_path:
        settings.configuration_path = config_path
    if event_path:
        settings.github_event_path = event_path
    if repository:
        settings.github_repository = repository

    try:
        result = asyncio.run(run_action(settings))
    except Exception as exc:
        actions_error(describe_error(exc))
        sys.exit(1)

    if json_output:
        console.print_json(result.model_dump_json(indent=2))
    else:
        _display_result(result)


def _display_result(result: AssignResult) -> None:
    """Affiche le résumé de l'exécution."""
    if result.skipped:
        console.print(Panel(f"[yellow]Ignorée[/] — {result.reason}", title="Auto-Assign"))
        return

    reviewers = ", ".join(result.reviewers) or "—"
    assignees = ", ".join(result.assignees) or "—"
    console.print(Panel(
        f"[bold]Reviewers :[/] {reviewers}\n"
        f"[bold]Assignees :[/] {assignees}",
        title="Auto-Assign",
        border_style="green",
    ))


if __name__ == "__main__":
    main()
