"""Structures de données partagées entre la couche UI et les contrôleurs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionPhase(Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class View(Enum):
    CREDENTIALS = "credentials"
    ROSTER = "roster"


class SessionError(RuntimeError):
    """Transition de session impossible depuis l'état courant."""


@dataclass(slots=True)
class AppState:
    """État interne de l'application, limité à la durée de vie du processus."""

    phase: SessionPhase = SessionPhase.ANONYMOUS
    username: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Retourne True si l'utilisateur est authentifié."""
        return self.phase is SessionPhase.AUTHENTICATED

    @property
    def current_view(self) -> View:
        return View.ROSTER if self.is_authenticated else View.CREDENTIALS

    def authenticate(self, username: str) -> None:
        if self.is_authenticated:
            raise SessionError("Une session est déjà ouverte.")
        self.phase = SessionPhase.AUTHENTICATED
        self.username = username

    def logout(self) -> None:
        if not self.is_authenticated:
            raise SessionError("Aucune session ouverte.")
        self.reset()

    def reset(self) -> None:
        """Réinitialise l'état de l'application."""
        self.phase = SessionPhase.ANONYMOUS
        self.username = None
