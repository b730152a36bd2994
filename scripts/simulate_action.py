#!/usr/bin/env python3
"""
Simulation locale de l'action Auto-Assign.

Exécute le handler complet SANS appeler l'API GitHub :
  - Pas besoin de token
  - Client en mémoire qui garde l'état des reviewers / assignees
  - Affiche le journal des appels distants et le résultat

Usage :
  python scripts/simulate_action.py
  python scripts/simulate_action.py --scenario partial
  python scripts/simulate_action.py --scenario flaky
"""

from __future__ import annotations

import asyncio
import random

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from auto_assign.coordinator import ReviewCoordinator
from auto_assign.handler import handle_pull_request, parse_config
from auto_assign.models import ApiResponse, RequestContext

console = Console()

CONFIG_YAML = """\
addReviewers: true
addAssignees: author
reviewers:
  - alice
  - bob
  - carol
  - dave
numberOfReviewers: 0
skipKeywords:
  - wip
filterLabels:
  exclude:
    - on-hold
"""


class InMemoryClient:
    """ReviewClient en mémoire, avec option de panne en lecture."""

    def __init__(self, requested: list[str], reviews: list[dict], fail_reads: bool = False):
        self.requested = list(requested)
        self.reviews = reviews
        self.assignees: list[str] = []
        self.fail_reads = fail_reads
        self.calls: list[tuple[str, str]] = []

    async def list_requested_reviewers(self, *, owner, repo, pull_number):
        self.calls.append(("list_requested_reviewers", ""))
        if self.fail_reads:
            raise ConnectionError("502 Bad Gateway")
        return ApiResponse(status=200, data={"users": [{"login": u} for u in self.requested]})

    async def request_reviewers(self, *, owner, repo, pull_number, reviewers):
        self.calls.append(("request_reviewers", ", ".join(reviewers)))
        self.requested.extend(r for r in reviewers if r not in self.requested)
        return ApiResponse(status=201, data={"requested_reviewers": reviewers})

    async def list_reviews(self, *, owner, repo, pull_number):
        self.calls.append(("list_reviews", ""))
        if self.fail_reads:
            raise ConnectionError("502 Bad Gateway")
        return ApiResponse(status=200, data=self.reviews)

    async def add_assignees(self, *, owner, repo, issue_number, assignees):
        self.calls.append(("add_assignees", ", ".join(assignees)))
        self.assignees.extend(assignees)
        return ApiResponse(status=201, data={"assignees": [{"login": a} for a in self.assignees]})


SCENARIOS = {
    "fresh": ("Aucun reviewer encore demandé", dict(requested=[], reviews=[])),
    "partial": (
        "bob déjà demandé, carol a déjà approuvé",
        dict(requested=["bob"], reviews=[{"state": "APPROVED", "user": {"login": "carol"}}]),
    ),
    "flaky": ("Lectures GitHub en panne (fail-open)", dict(requested=["bob"], reviews=[], fail_reads=True)),
}


async def run_simulation(scenario: str) -> None:
    description, client_kwargs = SCENARIOS[scenario]
    console.print(Panel(f"[bold cyan]Scénario : {scenario}[/]\n{description}", title="Auto-Assign — Simulation"))

    client = InMemoryClient(**client_kwargs)
    context = RequestContext.from_event(
        "acme",
        "rocket",
        {
            "pull_request": {
                "number": 42,
                "title": "Add login page",
                "labels": [{"name": "feature"}],
                "user": {"login": "erin"},
            }
        },
    )
    coordinator = ReviewCoordinator(client, context, debug=lambda msg: console.print(f"[dim]debug: {escape(msg)}[/]"))
    result = await handle_pull_request(coordinator, parse_config(CONFIG_YAML), rng=random.Random(0))

    table = Table(title="Appels distants")
    table.add_column("#", justify="right")
    table.add_column("Opération", style="cyan")
    table.add_column("Arguments")
    for i, (name, args) in enumerate(client.calls, 1):
        table.add_row(str(i), name, args)
    console.print(table)

    console.print(Panel(
        f"[bold]Reviewers visés :[/] {', '.join(result.reviewers) or '—'}\n"
        f"[bold]Reviewers sur la PR :[/] {', '.join(client.requested) or '—'}\n"
        f"[bold]Assignees :[/] {', '.join(client.assignees) or '—'}",
        title="Résultat",
        border_style="green",
    ))


@click.command()
@click.option("--scenario", "-s", type=click.Choice(sorted(SCENARIOS)), default="fresh",
              help="Scénario à simuler")
def main(scenario: str) -> None:
    """Simule une exécution de l'action sans appel réseau."""
    asyncio.run(run_simulation(scenario))


if __name__ == "__main__":
    main()
