"""Contrôleur du formulaire de connexion / inscription."""

from __future__ import annotations

import logging
from collections.abc import Callable

from userdesk.services import IpInfo, ServerError, UsersService, UsersServiceError
from userdesk.tasks import CancelToken, Runner
from userdesk.validation import (
    FIELDS,
    FieldError,
    FormMode,
    is_form_valid,
    normalize_field,
    validate_field,
)

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


def _empty_form() -> dict[str, str]:
    return {name: "" for name in FIELDS}


class CredentialForm:
    """Valeurs saisies, erreurs par champ et soumission vers le backend.

    La validité n'est jamais stockée : elle est recalculée à chaque lecture à
    partir des valeurs courantes, des erreurs et du mode.
    """

    def __init__(
        self,
        service: UsersService,
        runner: Runner,
        *,
        notify: Callable[[str], None],
        on_authenticated: Callable[[str], None],
    ) -> None:
        self._service = service
        self._runner = runner
        self._notify = notify
        self._on_authenticated = on_authenticated
        self._token = CancelToken()
        self._listeners: list[Listener] = []

        self.values = _empty_form()
        self.errors: dict[str, FieldError] = {}
        self.mode = FormMode.LOGIN
        self.server_error: ServerError | None = None
        self.submitting = False
        self.welcome_message = ""
        self.ip = ""
        self.ip_data = ""

    @property
    def is_valid(self) -> bool:
        return is_form_valid(self.values, self.errors, self.mode)

    @property
    def visible_fields(self) -> tuple[str, ...]:
        return self.mode.required_fields

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def close(self) -> None:
        """Annule les requêtes en cours ; leurs réponses seront ignorées."""
        self._token.cancel()
        self._listeners.clear()

    # ----------------------------------------------------------- Saisie -
    def change(self, field: str, raw: str) -> str:
        """Enregistre une frappe et revalide uniquement ce champ."""
        value = normalize_field(field, raw)
        error = validate_field(field, value)
        self.values[field] = value
        if error is None:
            self.errors.pop(field, None)
        else:
            self.errors[field] = error
        self._emit()
        return value

    def toggle_mode(self) -> None:
        self.mode = self.mode.toggled()
        self._emit()

    def dismiss_error(self) -> None:
        self.server_error = None
        self._emit()

    # -------------------------------------------------------- Soumission -
    def submit(self) -> None:
        if self.submitting:
            return
        if not self.is_valid:
            logger.debug("Submit ignored: form is not valid")
            return

        self.submitting = True
        self._emit()

        if self.mode is FormMode.LOGIN:
            username = self.values["username"]
            password = self.values["password"]
            logger.info("Login attempt for %s", username)
            self._runner.run(
                lambda: self._service.validate_credentials(username, password),
                on_success=lambda message: self._logged_in(username, message),
                on_error=self._failed,
                token=self._token,
            )
        else:
            payload = dict(self.values)
            logger.info("Registering %s", payload["username"])
            self._runner.run(
                lambda: self._service.register(payload),
                on_success=self._registered,
                on_error=self._failed,
                token=self._token,
            )

    def _logged_in(self, username: str, message: str) -> None:
        self.submitting = False
        if message:
            self._notify(message)
        self._on_authenticated(username)
        self._emit()

    def _registered(self, message: str) -> None:
        self.submitting = False
        if message:
            self._notify(message)
        self.values = _empty_form()
        self.errors = {}
        self._emit()

    def _failed(self, exc: BaseException) -> None:
        self.submitting = False
        if not isinstance(exc, UsersServiceError):
            self._emit()
            raise exc
        logger.warning("Request rejected: %s (%s)", exc.error.message, exc.error.status_code)
        self.server_error = exc.error
        self._emit()

    # ------------------------------------------------------------ Accueil -
    def load_greeting(self) -> None:
        """Charge le message d'accueil et l'IP ; les échecs sont seulement journalisés."""
        self._runner.run(
            self._service.fetch_welcome,
            on_success=self._welcome_loaded,
            on_error=lambda exc: self._greeting_failed("welcome message", exc),
            token=self._token,
        )
        self._runner.run(
            self._service.fetch_ip,
            on_success=self._ip_loaded,
            on_error=lambda exc: self._greeting_failed("IP address", exc),
            token=self._token,
        )

    def _welcome_loaded(self, message: str) -> None:
        self.welcome_message = message
        self._emit()

    def _ip_loaded(self, info: IpInfo) -> None:
        self.ip = info.ip
        self.ip_data = info.data
        self._emit()

    def _greeting_failed(self, what: str, exc: BaseException) -> None:
        if not isinstance(exc, UsersServiceError):
            raise exc
        logger.warning("Could not fetch %s: %s", what, exc)

    def _emit(self) -> None:
        for listener in list(self._listeners):
            listener()
