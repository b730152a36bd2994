"""
Configuration centralisée — Auto-Assign Action.

Charge les variables d'environnement fournies par le runner GitHub Actions
(et un éventuel .env local) et expose un objet Settings validé via Pydantic.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from auto_assign.exceptions import ConfigurationError

# ── Racine du projet ────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Charger .env ────────────────────────────
_env_path = PROJECT_ROOT / ".env"

DEFAULT_CONFIGURATION_PATH = ".github/auto_assign.yml"


class Settings(BaseSettings):
    """Paramètres globaux chargés depuis les variables d'environnement."""

    # GitHub
    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_REPO-TOKEN", "INPUT_REPO_TOKEN", "GITHUB_TOKEN"),
        description="Token GitHub (input repo-token de l'action)",
    )
    github_api_url: str = Field(default="https://api.github.com")

    # Contexte du runner
    github_repository: str = Field(default="", description="owner/repo")
    github_event_name: str = Field(default="")
    github_event_path: str = Field(default="")
    github_sha: str = Field(default="")

    # Action
    configuration_path: str = Field(
        default=DEFAULT_CONFIGURATION_PATH,
        validation_alias=AliasChoices("INPUT_CONFIGURATION-PATH", "INPUT_CONFIGURATION_PATH", "CONFIGURATION_PATH"),
    )

    # Général
    log_level: str = Field(default="INFO")

    model_config = {
        "env_file": str(_env_path),
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    # ── Helpers ──────────────────────────────

    @property
    def github_configured(self) -> bool:
        return bool(self.github_token)

    @property
    def repository_coordinates(self) -> tuple[str, str]:
        """Découpe GITHUB_REPOSITORY en (owner, repo)."""
        owner, sep, repo = self.github_repository.partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY invalide : {self.github_repository!r} (attendu owner/repo)."
            )
        return owner, repo


def get_settings() -> Settings:
    """Retourne une instance Settings fraîche."""
    return Settings()
