"""Contrôleur de la liste des utilisateurs enregistrés."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from userdesk.services import UserRecord, UsersService, UsersServiceError
from userdesk.tasks import CancelToken, Runner

logger = logging.getLogger(__name__)

EDIT_FIELDS = ("email", "birthDate", "fullName", "password")
CONFIRM_DELETE = "¿Estás seguro de eliminar este usuario?"
DELETED = "Usuario eliminado exitosamente"
DELETE_FAILED = "No se pudo eliminar el usuario"
UPDATED = "Usuario actualizado exitosamente"
UPDATE_FAILED = "No se pudo actualizar el usuario"

Notify = Callable[..., None]


def _empty_edit_form() -> dict[str, str]:
    return {name: "" for name in EDIT_FIELDS}


class RosterController:
    """Charge, modifie et supprime les utilisateurs affichés après connexion.

    ``notify(message, error=False)`` affiche une alerte bloquante et
    ``confirm(message)`` demande une confirmation à l'utilisateur.
    """

    def __init__(
        self,
        service: UsersService,
        runner: Runner,
        *,
        confirm: Callable[[str], bool],
        notify: Notify,
    ) -> None:
        self._service = service
        self._runner = runner
        self._confirm = confirm
        self._notify = notify
        self._token = CancelToken()
        self._listeners: list[Callable[[], None]] = []

        self.users: list[UserRecord] = []
        self.loaded = False
        self.is_stale = False
        self.editing: UserRecord | None = None
        self.edit_values = _empty_edit_form()

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def close(self) -> None:
        self._token.cancel()
        self._listeners.clear()

    # ------------------------------------------------------------- Lecture -
    def refresh(self, *, keep_on_failure: bool = False) -> None:
        """Recharge la liste complète.

        En cas d'échec, la liste est vidée, sauf si ``keep_on_failure`` est
        vrai : les anciennes données restent affichées, marquées périmées.
        """
        self._runner.run(
            self._service.list_users,
            on_success=self._users_loaded,
            on_error=lambda exc: self._refresh_failed(exc, keep_on_failure),
            token=self._token,
        )

    def _users_loaded(self, users: list[UserRecord]) -> None:
        self.users = list(users)
        self.loaded = True
        self.is_stale = False
        self._emit()

    def _refresh_failed(self, exc: BaseException, keep_on_failure: bool) -> None:
        if not isinstance(exc, UsersServiceError):
            raise exc
        logger.warning("Could not fetch users: %s", exc)
        if keep_on_failure:
            self.is_stale = True
        else:
            self.users = []
            self.loaded = True
        self._emit()

    # ---------------------------------------------------------- Suppression -
    def delete(self, user_id: Any) -> bool:
        """Supprime un utilisateur après confirmation ; retourne False si annulé."""
        if not self._confirm(CONFIRM_DELETE):
            return False
        logger.info("Deleting user %s", user_id)
        self._runner.run(
            lambda: self._service.delete_user(user_id),
            on_success=self._deleted,
            on_error=lambda exc: self._mutation_failed(exc, DELETE_FAILED),
            token=self._token,
        )
        return True

    def _deleted(self, _message: str) -> None:
        self.refresh(keep_on_failure=True)
        self._notify(DELETED)

    # -------------------------------------------------------------- Édition -
    def begin_edit(self, record: UserRecord) -> None:
        self.editing = record
        self.edit_values = record.to_edit_values()
        self._emit()

    def change_edit(self, field: str, value: str) -> None:
        if field not in EDIT_FIELDS:
            raise ValueError(f"Champ non modifiable : {field!r}")
        self.edit_values[field] = value

    def cancel_edit(self) -> None:
        self.editing = None
        self.edit_values = _empty_edit_form()
        self._emit()

    def submit_edit(self) -> None:
        record = self.editing
        if record is None:
            return
        payload = {**self.edit_values, "username": record.username}
        logger.info("Updating user %s", record.id)
        self._runner.run(
            lambda: self._service.update_user(record.id, payload),
            on_success=lambda _message: self._updated(),
            on_error=lambda exc: self._mutation_failed(exc, UPDATE_FAILED),
            token=self._token,
        )

    def _updated(self) -> None:
        self._notify(UPDATED)
        self.editing = None
        self.edit_values = _empty_edit_form()
        self._emit()
        self.refresh(keep_on_failure=True)

    def _mutation_failed(self, exc: BaseException, message: str) -> None:
        if not isinstance(exc, UsersServiceError):
            raise exc
        logger.error("%s: %s", message, exc)
        self._notify(message, error=True)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener()
