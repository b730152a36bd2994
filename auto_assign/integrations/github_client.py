"""
Client GitHub — Auto-Assign Action.

Fournit l'accès à l'API GitHub pour :
- Lister les reviewers actuellement sollicités sur une PR
- Demander une review à de nouveaux reviewers
- Lister les reviews d'une PR
- Ajouter des assignees à une PR / issue
- Lire le fichier de configuration de l'action dans le repo

PyGithub est synchrone : chaque appel est exécuté dans un thread via
``asyncio.to_thread`` pour rester un point de suspension unique.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from github import Auth, Github
from github.PullRequest import PullRequest

from auto_assign.config import get_settings
from auto_assign.exceptions import ConfigurationError
from auto_assign.models import ApiResponse

logger = logging.getLogger("auto_assign.github")


class ReviewClient(Protocol):
    """Capacités distantes consommées par le ReviewCoordinator."""

    async def list_requested_reviewers(
        self, *, owner: str, repo: str, pull_number: int
    ) -> ApiResponse: ...

    async def request_reviewers(
        self, *, owner: str, repo: str, pull_number: int, reviewers: list[str]
    ) -> ApiResponse: ...

    async def list_reviews(
        self, *, owner: str, repo: str, pull_number: int
    ) -> ApiResponse: ...

    async def add_assignees(
        self, *, owner: str, repo: str, issue_number: int, assignees: list[str]
    ) -> ApiResponse: ...


class GitHubClient:
    """Adaptateur PyGithub implémentant ReviewClient."""

    def __init__(self, token: str | None = None, base_url: str | None = None):
        settings = get_settings()
        if not (token or settings.github_configured):
            raise ConfigurationError("Token GitHub non configuré (input repo-token / GITHUB_TOKEN).")
        self._token = token or settings.github_token
        self._gh = Github(
            auth=Auth.Token(self._token),
            base_url=base_url or settings.github_api_url,
        )

    def _get_pull(self, owner: str, repo: str, pull_number: int) -> PullRequest:
        return self._gh.get_repo(f"{owner}/{repo}", lazy=True).get_pull(pull_number)

    # ── Reviewers ───────────────────────────

    async def list_requested_reviewers(
        self, *, owner: str, repo: str, pull_number: int
    ) -> ApiResponse:
        return await asyncio.to_thread(self._list_requested_reviewers, owner, repo, pull_number)

    def _list_requested_reviewers(self, owner: str, repo: str, pull_number: int) -> ApiResponse:
        users, teams = self._get_pull(owner, repo, pull_number).get_review_requests()
        return ApiResponse(
            status=200,
            data={
                "users": [{"login": u.login} for u in users],
                "teams": [{"slug": t.slug} for t in teams],
            },
        )

    async def request_reviewers(
        self, *, owner: str, repo: str, pull_number: int, reviewers: list[str]
    ) -> ApiResponse:
        return await asyncio.to_thread(self._request_reviewers, owner, repo, pull_number, reviewers)

    def _request_reviewers(
        self, owner: str, repo: str, pull_number: int, reviewers: list[str]
    ) -> ApiResponse:
        self._get_pull(owner, repo, pull_number).create_review_request(reviewers=list(reviewers))
        logger.info(f"Review demandée sur {owner}/{repo}#{pull_number} : {', '.join(reviewers)}")
        return ApiResponse(status=201, data={"requested_reviewers": list(reviewers)})

    # ── Reviews ─────────────────────────────

    async def list_reviews(self, *, owner: str, repo: str, pull_number: int) -> ApiResponse:
        return await asyncio.to_thread(self._list_reviews, owner, repo, pull_number)

    def _list_reviews(self, owner: str, repo: str, pull_number: int) -> ApiResponse:
        reviews = self._get_pull(owner, repo, pull_number).get_reviews()
        return ApiResponse(
            status=200,
            data=[
                {
                    "id": r.id,
                    "state": r.state,
                    "user": {"login": r.user.login} if r.user else None,
                }
                for r in reviews
            ],
        )

    # ── Assignees ───────────────────────────

    async def add_assignees(
        self, *, owner: str, repo: str, issue_number: int, assignees: list[str]
    ) -> ApiResponse:
        return await asyncio.to_thread(self._add_assignees, owner, repo, issue_number, assignees)

    def _add_assignees(
        self, owner: str, repo: str, issue_number: int, assignees: list[str]
    ) -> ApiResponse:
        issue = self._gh.get_repo(f"{owner}/{repo}", lazy=True).get_issue(issue_number)
        issue.add_to_assignees(*assignees)
        logger.info(f"Assignees ajoutés sur {owner}/{repo}#{issue_number} : {', '.join(assignees)}")
        return ApiResponse(
            status=201,
            data={"assignees": [{"login": a.login} for a in issue.assignees]},
        )

    # ── Fichier de configuration ────────────

    async def get_file_content(self, *, owner: str, repo: str, path: str, ref: str = "") -> str:
        return await asyncio.to_thread(self._get_file_content, owner, repo, path, ref)

    def _get_file_content(self, owner: str, repo: str, path: str, ref: str) -> str:
        """Lit le contenu d'un fichier du repo (branche par défaut si ref vide)."""
        repository = self._gh.get_repo(f"{owner}/{repo}", lazy=True)
        if ref:
            content_file = repository.get_contents(path, ref=ref)
        else:
            content_file = repository.get_contents(path)

        if isinstance(content_file, list):
            raise ConfigurationError(f"{path} est un répertoire, pas un fichier.")
        return content_file.decoded_content.decode("utf-8", errors="replace")
