"""
Exceptions — Auto-Assign Action.
"""


class AutoAssignError(Exception):
    """Erreur de base de l'action."""


class ConfigurationError(AutoAssignError):
    """Configuration absente, invalide ou événement non exploitable."""
