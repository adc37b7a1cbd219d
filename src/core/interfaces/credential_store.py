"""Contrato del almacén de credenciales.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite alternar entre el `.env` del usuario y un almacén en memoria
  (tests, embebido en otra app) sin tocar el cliente.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStore(Protocol):
    """Almacén clave/valor de propiedades, sin expiración ni versionado."""

    def get_property(self, key: str) -> str | None:
        """Devuelve el valor guardado para `key` o `None` si no existe."""

        ...

    def set_property(self, key: str, value: str) -> None:
        ...

    def get_keys(self) -> list[str]:
        ...
