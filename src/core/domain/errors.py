"""Errores del cliente.

La política es uniforme: cualquier status inesperado se traduce en
`BacklogApiError` con el cuerpo crudo de la respuesta. No hay reintentos.
"""

from __future__ import annotations


class BacklogError(Exception):
    """Base de todos los errores propios del cliente."""


class CredentialsNotSetError(BacklogError):
    def __init__(self) -> None:
        super().__init__("API key or organization domain is not configured.")


class MethodNotAllowedError(BacklogError, ValueError):
    def __init__(self, method: str) -> None:
        super().__init__(f"{method} is not allowed")
        self.method = method


class BacklogApiError(BacklogError):
    """Status HTTP distinto del esperado por el endpoint."""

    def __init__(self, action: str, status_code: int, body: str) -> None:
        super().__init__(f"Failed to {action}: {body}")
        self.action = action
        self.status_code = status_code
        self.body = body
