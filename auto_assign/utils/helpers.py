"""
Utilitaires divers — Auto-Assign Action.
"""

from __future__ import annotations

import json
import random
from typing import Any, Iterable

from pydantic import BaseModel


def to_debug_json(obj: Any) -> str:
    """Sérialise un résultat d'API pour le canal de diagnostic."""
    if isinstance(obj, BaseModel):
        obj = obj.model_dump(mode="json")
    return json.dumps(obj, default=str)


def describe_error(exc: BaseException) -> str:
    """Forme texte d'une exception (ex: « RuntimeError: API Error »)."""
    message = str(exc)
    name = type(exc).__name__
    return f"{name}: {message}" if message else name


def includes_skip_keywords(title: str, skip_keywords: Iterable[str]) -> bool:
    """Vrai si le titre contient l'un des mots-clés (insensible à la casse)."""
    lowered = title.lower()
    return any(keyword.lower() in lowered for keyword in skip_keywords if keyword)


def choose_users(
    candidates: Iterable[str],
    desired_number: int,
    filter_user: str | None = None,
    rng: random.Random | None = None,
) -> list[str]:
    """
    Tire au sort ``desired_number`` utilisateurs parmi les candidats.

    Les doublons et ``filter_user`` (auteur de la PR) sont écartés ;
    ``desired_number == 0`` retourne tous les candidats restants, dans l'ordre.
    """
    seen: set[str] = set()
    pool: list[str] = []
    for user in candidates:
        if user and user != filter_user and user not in seen:
            seen.add(user)
            pool.append(user)

    if desired_number <= 0 or desired_number >= len(pool):
        return pool
    return (rng or random).sample(pool, desired_number)

