"""Gestion centralisée de la configuration du client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = "http://localhost:8082"
DEFAULT_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_THEME = "dark"
_THEMES = ("dark", "light")


class ConfigError(RuntimeError):
    """Erreur levée lorsque la configuration est invalide."""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Paramètres nécessaires pour dialoguer avec le backend des utilisateurs."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    theme: str = DEFAULT_THEME

    def url_for(self, path: str) -> str:
        """Construit l'URL complète d'un endpoint du backend."""
        return f"{self.api_url}/{path.lstrip('/')}"


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(f"USERDESK_TIMEOUT doit être un nombre, reçu : {raw!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"USERDESK_TIMEOUT doit être positif, reçu : {raw!r}")
    return timeout


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"USERDESK_LOG_LEVEL inconnu : {raw!r}")
    return level


def load_config() -> AppConfig:
    """Charge la configuration depuis l'environnement (et un éventuel .env)."""
    load_dotenv()

    api_url = os.getenv("USERDESK_API_URL", DEFAULT_API_URL).rstrip("/")
    timeout = _parse_timeout(os.getenv("USERDESK_TIMEOUT", str(DEFAULT_TIMEOUT)))
    log_level = _parse_log_level(os.getenv("USERDESK_LOG_LEVEL", DEFAULT_LOG_LEVEL))
    theme = os.getenv("USERDESK_THEME", DEFAULT_THEME).strip().lower()

    if not api_url:
        raise ConfigError("USERDESK_API_URL ne peut pas être vide.")
    if theme not in _THEMES:
        raise ConfigError(f"USERDESK_THEME doit valoir 'dark' ou 'light', reçu : {theme!r}")

    return AppConfig(
        api_url=api_url,
        timeout=timeout,
        log_level=log_level,
        theme=theme,
    )
