"""
Coordinateur de reviews — Auto-Assign Action.

Seul point de contact avec le sous-système de review GitHub :
  - lecture des reviewers sollicités et des approbations (fail-open :
    toute erreur ou statut != 200 donne une liste vide)
  - demande de review limitée aux nouveaux reviewers
  - ajout d'assignees (fail-closed : l'erreur remonte à l'appelant)
  - test d'appartenance des labels de la PR
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

from auto_assign.integrations.github_client import ReviewClient
from auto_assign.models import ApiResponse, RequestContext, Review, ReviewState, User, decode_each
from auto_assign.utils.helpers import describe_error, to_debug_json
from auto_assign.utils.logger import DebugSink, actions_debug

logger = logging.getLogger("auto_assign.coordinator")

NO_NEW_REVIEWERS = "No new reviewers to add"


class ReviewCoordinator:
    """Réconcilie reviewers et assignees d'une PR via un ReviewClient injecté."""

    def __init__(
        self,
        client: ReviewClient,
        context: RequestContext,
        debug: DebugSink = actions_debug,
    ):
        self._client = client
        self._context = context
        self._debug = debug

    @property
    def context(self) -> RequestContext:
        return self._context

    # ── Politiques d'erreur ─────────────────

    async def _read(
        self,
        call: Callable[[], Awaitable[ApiResponse]],
        extract: Callable[[Any], list[str]],
    ) -> list[str]:
        """Lecture fail-open : exception, statut != 200 ou payload vide → []."""
        try:
            result = await call()
            self._debug(to_debug_json(result))
            if result.status == 200 and result.data:
                return extract(result.data)
            return []
        except Exception as exc:
            self._debug(describe_error(exc))
            return []

    async def _write(self, call: Callable[[], Awaitable[ApiResponse]]) -> ApiResponse:
        """Mutation fail-closed : l'exception remonte telle quelle."""
        result = await call()
        self._debug(to_debug_json(result))
        return result

    # ── Reviewers ───────────────────────────

    async def get_current_reviewers(self) -> list[str]:
        ctx = self._context
        return await self._read(
            lambda: self._client.list_requested_reviewers(
                owner=ctx.owner, repo=ctx.repo, pull_number=ctx.number
            ),
            _requested_logins,
        )

    async def add_reviewers(self, reviewers: list[str]) -> None:
        """
        Demande une review aux seuls reviewers pas encore sollicités.

        Si la lecture des reviewers courants échoue, la liste complète est
        demandée. Lecture puis écriture ne sont pas atomiques : une demande
        externe entre les deux appels n'est pas détectée.
        """
        ctx = self._context
        current = await self.get_current_reviewers()
        new_reviewers = [r for r in reviewers if r not in current]

        if not new_reviewers:
            self._debug(NO_NEW_REVIEWERS)
            return

        await self._write(
            lambda: self._client.request_reviewers(
                owner=ctx.owner,
                repo=ctx.repo,
                pull_number=ctx.number,
                reviewers=new_reviewers,
            )
        )

    # ── Approbations ────────────────────────

    async def get_approvers(self) -> list[str]:
        """
        Auteurs des reviews APPROVED, dans l'ordre de l'API.

        Pas de dédoublonnage par auteur ni de réduction à la dernière review :
        deux approbations du même auteur donnent deux entrées.
        """
        ctx = self._context
        return await self._read(
            lambda: self._client.list_reviews(owner=ctx.owner, repo=ctx.repo, pull_number=ctx.number),
            _approved_logins,
        )

    # ── Assignees ───────────────────────────

    async def add_assignees(self, assignees: list[str]) -> None:
        ctx = self._context
        await self._write(
            lambda: self._client.add_assignees(
                owner=ctx.owner, repo=ctx.repo, issue_number=ctx.number, assignees=assignees
            )
        )

    # ── Labels ──────────────────────────────

    def has_any_label(self, labels: list[str]) -> bool:
        if not self._context.pull_request:
            return False
        return any(label.name in labels for label in self._context.labels)


def _requested_logins(data: dict[str, Any]) -> list[str]:
    return [u.login for u in decode_each(User, data.get("users") or []) if u.login]


def _approved_logins(data: list[dict[str, Any]]) -> list[str]:
    reviews = decode_each(Review, data)
    return [
        r.login for r in reviews
        if r.state == ReviewState.APPROVED and r.login
    ]
