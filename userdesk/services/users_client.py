"""Encapsulation des appels HTTP au backend des utilisateurs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

import requests

from userdesk.config import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_WELCOME = "Bienvenido!"
CONNECTION_ERROR_MESSAGE = "connection error"
CONNECTION_ERROR_STATUS = 500
_MASK = "******"


class ErrorKind(Enum):
    """Catégories d'erreurs connues renvoyées par le backend."""

    USERNAME_TAKEN = "username_taken"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNKNOWN = "unknown"


_KNOWN_MESSAGES = {
    "Username already exists": ErrorKind.USERNAME_TAKEN,
    "Invalid credentials": ErrorKind.INVALID_CREDENTIALS,
}


@dataclass(frozen=True, slots=True)
class ServerError:
    """Erreur structurée produite à la frontière avec le backend."""

    message: str
    status_code: int | None = None
    kind: ErrorKind = ErrorKind.UNKNOWN

    @classmethod
    def from_message(cls, message: str, status_code: int | None = None) -> "ServerError":
        return cls(
            message=message,
            status_code=status_code,
            kind=_KNOWN_MESSAGES.get(message, ErrorKind.UNKNOWN),
        )

    @classmethod
    def connection_error(cls) -> "ServerError":
        return cls.from_message(CONNECTION_ERROR_MESSAGE, CONNECTION_ERROR_STATUS)


class UsersServiceError(RuntimeError):
    """Erreur levée lors d'un appel au backend qui n'a pas abouti."""

    def __init__(self, error: ServerError) -> None:
        super().__init__(error.message)
        self.error = error


@dataclass(frozen=True, slots=True)
class UserRecord:
    """Utilisateur tel que renvoyé par le backend, sans validation locale."""

    id: Any
    username: str = ""
    email: str = ""
    full_name: str = ""
    birth_date: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "UserRecord":
        return cls(
            id=payload.get("id"),
            username=payload.get("username") or "",
            email=payload.get("email") or "",
            full_name=payload.get("fullName") or "",
            birth_date=payload.get("birthDate") or "",
        )

    def to_edit_values(self) -> dict[str, str]:
        """Valeurs de pré-remplissage du formulaire d'édition."""
        return {
            "email": self.email,
            "birthDate": self.birth_date,
            "fullName": self.full_name,
            "password": "",
        }


@dataclass(frozen=True, slots=True)
class IpInfo:
    """Adresse IP de l'appelant et description associée."""

    ip: str = ""
    data: str = ""


def _describe_ip_data(data: Any) -> str:
    if not data:
        return ""
    if isinstance(data, Mapping):
        return ", ".join(f"{key}: {value}" for key, value in data.items() if value not in (None, ""))
    return str(data)


def _masked(values: Mapping[str, Any] | None, key: str) -> Mapping[str, Any] | None:
    if not values:
        return values
    return {name: (_MASK if name.lower() == key else value) for name, value in values.items()}


class UsersService:
    """Service responsable des échanges avec le backend d'authentification."""

    def __init__(self, config: AppConfig, *, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------- Accueil -
    def fetch_welcome(self) -> str:
        """Récupère le message d'accueil affiché sur l'écran de connexion."""
        payload = self._request("GET", "/")
        return payload.get("message") or DEFAULT_WELCOME

    def fetch_ip(self) -> IpInfo:
        """Récupère l'adresse IP de l'appelant telle que vue par le backend."""
        payload = self._request("GET", "/ip")
        data = payload.get("data")
        ip = payload.get("ip")
        if not ip and isinstance(data, Mapping):
            ip = data.get("ip")
        return IpInfo(ip=str(ip or ""), data=_describe_ip_data(data))

    # ------------------------------------------------------- Authentification -
    def register(self, form: Mapping[str, str]) -> str:
        payload = self._request("POST", "/register", json=dict(form))
        return payload.get("message") or ""

    def validate_credentials(self, username: str, password: str) -> str:
        """Vérifie les identifiants ; les erreurs remontent en UsersServiceError."""
        payload = self._request(
            "GET",
            "/validate",
            headers={"Username": username, "Password": password},
        )
        return payload.get("intMessage") or ""

    # ------------------------------------------------------- Utilisateurs -
    def list_users(self) -> list[UserRecord]:
        """Retourne les utilisateurs dans l'ordre fourni par le backend."""
        payload = self._request("GET", "/users")
        data = payload.get("data") or {}
        records = data.values() if isinstance(data, Mapping) else data
        return [UserRecord.from_payload(record) for record in records]

    def update_user(self, user_id: Any, payload: Mapping[str, str]) -> str:
        response = self._request("PUT", f"/users/{user_id}", json=dict(payload))
        return response.get("message") or ""

    def delete_user(self, user_id: Any) -> str:
        response = self._request("DELETE", f"/users/{user_id}")
        return response.get("message") or ""

    # --------------------------------------------------------------- Interne -
    def _request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = self._config.url_for(path)
        logger.debug(
            "Request: %s %s headers=%s body=%s",
            method,
            url,
            _masked(headers, "password"),
            _masked(json, "password"),
        )

        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                json=json,
                timeout=self._config.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Request %s %s failed: %s", method, url, exc)
            raise UsersServiceError(ServerError.connection_error()) from exc

        payload = self._decode(response)
        logger.debug("Response: %s %s -> %s %s", method, url, response.status_code, payload)

        if not response.ok:
            raise UsersServiceError(self._server_error(response, payload))
        return payload

    @staticmethod
    def _decode(response: requests.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}

    @staticmethod
    def _server_error(response: requests.Response, payload: Mapping[str, Any]) -> ServerError:
        if not payload:
            return ServerError.connection_error()
        status_code = payload.get("statusCode", response.status_code)
        return ServerError.from_message(str(payload.get("message") or ""), status_code)
