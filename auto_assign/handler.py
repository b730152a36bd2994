"""
Handler principal — Auto-Assign Action.

Une invocation = une réconciliation :
  Étape 0 — Contexte (événement, configuration YAML du repo)
  Étape 1 — Filtres (mots-clés, draft, labels)
  Étape 2 — Reviewers (tirage, hors auteur et approbateurs)
  Étape 3 — Assignees (auteur ou tirage)
"""

from __future__ import annotations

import logging
import random

import yaml
from pydantic import ValidationError

from auto_assign.config import Settings
from auto_assign.coordinator import ReviewCoordinator
from auto_assign.exceptions import ConfigurationError
from auto_assign.integrations.github_client import GitHubClient, ReviewClient
from auto_assign.models import AssignConfig, AssignResult, RequestContext
from auto_assign.utils.helpers import choose_users, includes_skip_keywords

logger = logging.getLogger("auto_assign.handler")


# ════════════════════════════════════════════
#  Configuration
# ════════════════════════════════════════════

def parse_config(content: str) -> AssignConfig:
    """Parse le YAML de configuration de l'action."""
    try:
        raw = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"YAML de configuration invalide : {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError("Le fichier de configuration doit être un mapping YAML.")
    try:
        return AssignConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Configuration invalide : {exc}") from exc


# ════════════════════════════════════════════
#  Sélection
# ════════════════════════════════════════════

def choose_reviewers(
    config: AssignConfig,
    creator: str | None,
    exclude: list[str] | None = None,
    rng: random.Random | None = None,
) -> list[str]:
    """Tire les reviewers (par groupe si useReviewGroups)."""
    excluded = set(exclude or [])
    if config.use_review_groups:
        chosen: list[str] = []
        for members in config.review_groups.values():
            candidates = [m for m in members or [] if m not in excluded and m not in chosen]
            chosen.extend(choose_users(candidates, config.number_of_reviewers, creator, rng))
        return chosen

    candidates = [r for r in config.reviewers if r not in excluded]
    return choose_users(candidates, config.number_of_reviewers, creator, rng)


def choose_assignees(
    config: AssignConfig,
    creator: str | None,
    rng: random.Random | None = None,
) -> list[str]:
    """Auteur seul si addAssignees == "author", sinon tirage parmi les assignees."""
    if config.assign_author:
        return [creator] if creator else []

    desired = config.number_of_assignees or config.number_of_reviewers
    if config.use_assignee_groups:
        chosen: list[str] = []
        for members in config.assignee_groups.values():
            candidates = [m for m in members or [] if m not in chosen]
            chosen.extend(choose_users(candidates, desired, creator, rng))
        return chosen

    candidates = config.assignees or config.reviewers
    return choose_users(candidates, desired, creator, rng)


# ════════════════════════════════════════════
#  Workflow
# ════════════════════════════════════════════

def _skip_reason(coordinator: ReviewCoordinator, config: AssignConfig) -> str | None:
    pr = coordinator.context.pull_request or {}

    title = pr.get("title") or ""
    if includes_skip_keywords(title, config.skip_keywords):
        return "Le titre contient un mot-clé d'exclusion."

    if pr.get("draft") and not config.run_on_draft:
        return "PR en draft."

    include = config.filter_labels.include
    if include and not coordinator.has_any_label(include):
        return "Aucun label requis (filterLabels.include) sur la PR."

    exclude = config.filter_labels.exclude
    if exclude and coordinator.has_any_label(exclude):
        return "Un label exclu (filterLabels.exclude) est présent sur la PR."

    return None


async def handle_pull_request(
    coordinator: ReviewCoordinator,
    config: AssignConfig,
    rng: random.Random | None = None,
) -> AssignResult:
    """Applique la configuration à la PR portée par le coordinateur."""
    context = coordinator.context
    if not context.pull_request:
        raise ConfigurationError("L'événement ne concerne pas une pull request.")
    config.validate_groups()

    reason = _skip_reason(coordinator, config)
    if reason:
        logger.info(f"Ignorée : {reason}")
        return AssignResult(skipped=True, reason=reason)

    result = AssignResult()
    creator = context.creator

    if config.add_reviewers:
        approvers = await coordinator.get_approvers()
        reviewers = choose_reviewers(config, creator, exclude=approvers, rng=rng)
        if reviewers:
            await coordinator.add_reviewers(reviewers)
            result.reviewers = reviewers
            logger.info(f"Reviewers visés : {', '.join(reviewers)}")
        else:
            logger.info("Aucun reviewer candidat.")

    if config.add_assignees:
        assignees = choose_assignees(config, creator, rng=rng)
        if assignees:
            await coordinator.add_assignees(assignees)
            result.assignees = assignees
            logger.info(f"Assignees ajoutés : {', '.join(assignees)}")
        else:
            logger.info("Aucun assignee candidat.")

    return result


async def load_config(client: GitHubClient, context: RequestContext, settings: Settings) -> AssignConfig:
    """Lit le fichier de configuration depuis le repo (au commit courant)."""
    content = await client.get_file_content(
        owner=context.owner,
        repo=context.repo,
        path=settings.configuration_path,
        ref=settings.github_sha,
    )
    return parse_config(content)


async def run_action(
    settings: Settings,
    client: ReviewClient | None = None,
    config: AssignConfig | None = None,
    rng: random.Random | None = None,
) -> AssignResult:
    """Point d'entrée d'une invocation de l'action."""
    owner, repo = settings.repository_coordinates
    if not settings.github_event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH non défini.")
    context = RequestContext.from_event_file(owner, repo, settings.github_event_path)
    logger.info(f"Auto-assign — {owner}/{repo}#{context.number} ({settings.github_event_name or 'event'})")

    if client is None:
        client = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)
    if config is None:
        if not isinstance(client, GitHubClient):
            raise ConfigurationError("Configuration requise quand un client externe est fourni.")
        config = await load_config(client, context, settings)

    coordinator = ReviewCoordinator(client, context)
    return await handle_pull_request(coordinator, config, rng=rng)
