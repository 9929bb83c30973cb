"""Textes affichés pour les erreurs renvoyées par le backend."""

from __future__ import annotations

from dataclasses import dataclass

from userdesk.services import ErrorKind, ServerError


@dataclass(frozen=True, slots=True)
class ErrorPresentation:
    title: str
    description: str
    suggestions: tuple[str, ...]


ERROR_PRESENTATIONS: dict[ErrorKind, ErrorPresentation] = {
    ErrorKind.USERNAME_TAKEN: ErrorPresentation(
        title="Nombre de usuario no disponible",
        description="El nombre de usuario que has elegido ya está en uso. Por favor, elige otro.",
        suggestions=(
            "Intenta con un nombre de usuario diferente",
            "Agrega números o caracteres especiales",
            "Usa una variación de tu nombre original",
        ),
    ),
    ErrorKind.INVALID_CREDENTIALS: ErrorPresentation(
        title="Inicio de sesión fallido",
        description=(
            "Las credenciales proporcionadas no son válidas. "
            "Verifica tu usuario y contraseña."
        ),
        suggestions=(
            "Revisa que no haya errores de escritura",
            "Asegúrate de usar mayúsculas/minúsculas correctamente",
            "Restablece tu contraseña si es necesario",
        ),
    ),
    ErrorKind.UNKNOWN: ErrorPresentation(
        title="Error en la solicitud",
        description="Ha ocurrido un problema inesperado. Inténtalo de nuevo más tarde.",
        suggestions=(
            "Verifica tu conexión a internet",
            "Recarga la página",
            "Contacta al soporte técnico si el problema persiste",
        ),
    ),
}


def present_error(error: ServerError | None) -> ErrorPresentation | None:
    """Retourne le texte à afficher, ou None s'il n'y a pas d'erreur."""
    if error is None:
        return None
    return ERROR_PRESENTATIONS.get(error.kind, ERROR_PRESENTATIONS[ErrorKind.UNKNOWN])


def status_line(error: ServerError | None) -> str | None:
    if error is None or error.status_code is None:
        return None
    return f"Código de error: {error.status_code}"
