"""
Modèles de données — Auto-Assign Action.

Contexte de la requête, entités GitHub lues (reviews, labels) et
configuration de l'action, typés et validés via Pydantic.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Optional, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError

from auto_assign.exceptions import ConfigurationError


# ════════════════════════════════════════════
#  Enums
# ════════════════════════════════════════════

class ReviewState(str, Enum):
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"


# ════════════════════════════════════════════
#  Entités GitHub (lecture seule)
# ════════════════════════════════════════════

class User(BaseModel):
    login: Optional[str] = None


class Label(BaseModel):
    name: str


class Review(BaseModel):
    """Review d'une PR telle que renvoyée par l'API."""
    state: str
    user: Optional[User] = None

    @property
    def login(self) -> str | None:
        return self.user.login if self.user else None


class ApiResponse(BaseModel):
    """Réponse d'une opération distante : statut HTTP + payload brut."""
    status: int
    data: Any = None


ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_each(model: type[ModelT], items: Iterable[Any]) -> list[ModelT]:
    """Valide chaque élément séparément ; les entrées illisibles sont ignorées."""
    decoded: list[ModelT] = []
    for item in items:
        try:
            decoded.append(model.model_validate(item))
        except ValidationError:
            continue
    return decoded


# ════════════════════════════════════════════
#  Contexte de la requête (entrée)
# ════════════════════════════════════════════

class RequestContext(BaseModel):
    """Coordonnées du repo + payload brut de l'événement. Immuable."""
    owner: str
    repo: str
    number: int
    payload: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def pull_request(self) -> dict[str, Any] | None:
        return self.payload.get("pull_request") or None

    @property
    def creator(self) -> str | None:
        pr = self.pull_request or {}
        return (pr.get("user") or {}).get("login")

    @property
    def labels(self) -> list[Label]:
        pr = self.pull_request or {}
        return decode_each(Label, pr.get("labels") or [])

    @classmethod
    def from_event(cls, owner: str, repo: str, payload: dict[str, Any]) -> RequestContext:
        """Construit le contexte ; le numéro vient de pull_request, issue, puis number."""
        number = (
            (payload.get("pull_request") or {}).get("number")
            or (payload.get("issue") or {}).get("number")
            or payload.get("number")
        )
        if not number:
            raise ConfigurationError("Événement sans numéro de pull request / issue.")
        try:
            number = int(number)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Numéro de pull request invalide : {number!r}") from exc
        return cls(owner=owner, repo=repo, number=number, payload=payload)

    @classmethod
    def from_event_file(cls, owner: str, repo: str, event_path: str | Path) -> RequestContext:
        """Charge le payload écrit par le runner (GITHUB_EVENT_PATH)."""
        path = Path(event_path)
        if not path.is_file():
            raise ConfigurationError(f"Fichier d'événement introuvable : {event_path}")
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
        return cls.from_event(owner, repo, payload)


# ════════════════════════════════════════════
#  Configuration de l'action (.github/auto_assign.yml)
# ════════════════════════════════════════════

class LabelFilter(BaseModel):
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)


class AssignConfig(BaseModel):
    """Contenu du fichier de configuration de l'action."""
    add_reviewers: bool = Field(default=True, alias="addReviewers")
    add_assignees: Union[bool, str] = Field(default=False, alias="addAssignees")
    reviewers: list[str] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)
    number_of_reviewers: int = Field(default=0, alias="numberOfReviewers", ge=0)
    number_of_assignees: int = Field(default=0, alias="numberOfAssignees", ge=0)
    use_review_groups: bool = Field(default=False, alias="useReviewGroups")
    review_groups: dict[str, list[str]] = Field(default_factory=dict, alias="reviewGroups")
    use_assignee_groups: bool = Field(default=False, alias="useAssigneeGroups")
    assignee_groups: dict[str, list[str]] = Field(default_factory=dict, alias="assigneeGroups")
    skip_keywords: list[str] = Field(default_factory=list, alias="skipKeywords")
    filter_labels: LabelFilter = Field(default_factory=LabelFilter, alias="filterLabels")
    run_on_draft: bool = Field(default=False, alias="runOnDraft")

    model_config = {"populate_by_name": True}

    @property
    def assign_author(self) -> bool:
        return isinstance(self.add_assignees, str) and self.add_assignees.lower() == "author"

    def validate_groups(self) -> None:
        """Vérifie la cohérence reviewers/groupes avant toute action."""
        if self.add_reviewers:
            if self.use_review_groups and not self.review_groups:
                raise ConfigurationError("useReviewGroups activé mais reviewGroups est vide.")
            if not self.use_review_groups and not self.reviewers:
                raise ConfigurationError("addReviewers activé mais aucun reviewer configuré.")
        if self.add_assignees and self.use_assignee_groups and not self.assignee_groups:
            raise ConfigurationError("useAssigneeGroups activé mais assigneeGroups est vide.")


# ════════════════════════════════════════════
#  Résultat d'une exécution
# ════════════════════════════════════════════

class AssignResult(BaseModel):
    """Ce que l'action a fait (ou pourquoi elle n'a rien fait)."""
    skipped: bool = False
    reason: str = ""
    reviewers: list[str] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)
