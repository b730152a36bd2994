"""
Auto-Assign Action
==================
Ajoute automatiquement reviewers et assignees aux Pull Requests GitHub.
Ne redemande jamais un reviewer déjà sollicité et tolère les pannes
de l'API GitHub en lecture.
"""

__version__ = "1.0.0"
