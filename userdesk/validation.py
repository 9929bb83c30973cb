"""Règles de validation des champs du formulaire d'identification.

Chaque champ possède une règle pure qui reçoit la valeur déjà normalisée et
retourne ``None`` si elle est valide, ou un :class:`FieldError` décrivant le
problème et les corrections possibles.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from email_validator import EmailNotValidError, validate_email

FIELDS = ("username", "password", "email", "birthDate", "fullName")
USERNAME_MAX_LENGTH = 10
PASSWORD_MIN_LENGTH = 6
FULL_NAME_MIN_LENGTH = 2
DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d")

_WHITESPACE = re.compile(r"\s+")
_ALPHANUMERIC = re.compile(r"[0-9a-z]+")


class FormMode(Enum):
    """Mode du formulaire : connexion ou inscription."""

    LOGIN = "login"
    REGISTER = "register"

    @property
    def required_fields(self) -> tuple[str, ...]:
        if self is FormMode.LOGIN:
            return ("username", "password")
        return FIELDS

    @property
    def title(self) -> str:
        return "Iniciar Sesión" if self is FormMode.LOGIN else "Registro de Usuarios"

    @property
    def submit_label(self) -> str:
        return "Iniciar sesión" if self is FormMode.LOGIN else "Registrar usuario"

    @property
    def toggle_label(self) -> str:
        if self is FormMode.LOGIN:
            return "¿No tienes una cuenta? Regístrate"
        return "¿Ya tienes cuenta? Inicia sesión"

    def toggled(self) -> "FormMode":
        return FormMode.REGISTER if self is FormMode.LOGIN else FormMode.LOGIN


@dataclass(frozen=True, slots=True)
class FieldError:
    """Échec de validation d'un champ, avec des pistes de correction."""

    message: str
    details: tuple[str, ...]


def normalize_username(value: str) -> str:
    """Minuscules, sans espaces, tronqué à 10 caractères."""
    return _WHITESPACE.sub("", value.lower())[:USERNAME_MAX_LENGTH]


def is_strong_password(value: str) -> bool:
    return len(value) >= PASSWORD_MIN_LENGTH and any(char.isdigit() for char in value)


def is_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_date(value: str) -> bool:
    for date_format in DATE_FORMATS:
        try:
            datetime.strptime(value, date_format)
        except ValueError:
            continue
        return True
    return False


def _check_username(value: str) -> FieldError | None:
    if not value:
        return FieldError(
            "El nombre de usuario es obligatorio",
            ("No puede estar vacío", "Máximo 10 caracteres", "Solo letras y números"),
        )
    if not _ALPHANUMERIC.fullmatch(value):
        return FieldError(
            "Formato de nombre de usuario inválido",
            ("Solo se permiten letras y números", "Sin espacios", "Sin caracteres especiales"),
        )
    return None


def _check_password(value: str) -> FieldError | None:
    if not value:
        return FieldError(
            "La contraseña es obligatoria",
            ("Mínimo 6 caracteres", "Al menos un número", "Combinación de letras y números"),
        )
    if not is_strong_password(value):
        return FieldError(
            "Contraseña débil",
            ("Mínimo 6 caracteres", "Al menos un número", "Combina mayúsculas, minúsculas y símbolos"),
        )
    return None


def _check_email(value: str) -> FieldError | None:
    if not value:
        return FieldError(
            "El correo electrónico es obligatorio",
            ("Formato válido requerido", "Debe contener @ y dominio", "Ejemplo: nombre@dominio.com"),
        )
    if not is_email(value):
        return FieldError(
            "Correo electrónico inválido",
            ("Debe contener @ y dominio", "Sin espacios", "Formato correcto: nombre@dominio.com"),
        )
    return None


def _check_birth_date(value: str) -> FieldError | None:
    if not value:
        return FieldError(
            "Fecha de nacimiento requerida",
            ("Selecciona una fecha válida", "Debes ser mayor de edad"),
        )
    if not is_date(value):
        return FieldError(
            "Fecha de nacimiento inválida",
            ("Formato de fecha incorrecto", "Selecciona una fecha real"),
        )
    return None


def _check_full_name(value: str) -> FieldError | None:
    trimmed = value.strip()
    if not trimmed:
        return FieldError(
            "Nombre completo es obligatorio",
            ("Mínimo 2 caracteres", "Incluye nombre y apellido", "Sin números ni caracteres especiales"),
        )
    if len(trimmed) < FULL_NAME_MIN_LENGTH:
        return FieldError(
            "Nombre muy corto",
            ("Mínimo 2 caracteres", "Incluye nombre y apellido"),
        )
    return None


FIELD_RULES: dict[str, Callable[[str], FieldError | None]] = {
    "username": _check_username,
    "password": _check_password,
    "email": _check_email,
    "birthDate": _check_birth_date,
    "fullName": _check_full_name,
}

_NORMALIZERS: dict[str, Callable[[str], str]] = {
    "username": normalize_username,
}


def normalize_field(name: str, value: str) -> str:
    """Retourne la valeur telle qu'elle doit être stockée dans le formulaire."""
    normalizer = _NORMALIZERS.get(name)
    return normalizer(value) if normalizer else value


def validate_field(name: str, value: str) -> FieldError | None:
    try:
        rule = FIELD_RULES[name]
    except KeyError:
        raise ValueError(f"Champ inconnu : {name!r}") from None
    return rule(value)


def is_form_valid(
    values: Mapping[str, str],
    errors: Mapping[str, FieldError],
    mode: FormMode,
) -> bool:
    """Vrai si aucun champ n'est en erreur et que les champs requis sont remplis."""
    if errors:
        return False
    return all(values.get(name) for name in mode.required_fields)
