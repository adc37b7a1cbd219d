"""Gestión de credenciales (API key + dominio de la organización).

Por qué en `core/`:
- Es el único estado persistente del sistema; el cliente HTTP no debería
  saber dónde vive.
- Las funciones reciben el almacén explícitamente (nada global).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from core.config import get_user_env_file, read_user_env_vars, write_user_env_vars
from core.domain.errors import CredentialsNotSetError
from core.domain.models import Credentials
from core.interfaces.credential_store import CredentialStore

logger = logging.getLogger(__name__)

PROPERTY_KEY_API_KEY = "BACKLOG_API_KEY"
PROPERTY_KEY_ORG_DOMAIN = "BACKLOG_ORG_DOMAIN"

_CREDENTIAL_KEYS = (PROPERTY_KEY_API_KEY, PROPERTY_KEY_ORG_DOMAIN)


class MemoryCredentialStore:
    """Almacén en memoria (tests o uso embebido)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_property(self, key: str) -> str | None:
        return self._data.get(key)

    def set_property(self, key: str, value: str) -> None:
        self._data[key] = value

    def get_keys(self) -> list[str]:
        return list(self._data.keys())


class EnvFileCredentialStore:
    """Almacén persistente sobre el `.env` global del usuario.

    Reglas:
    - Escribe siempre en el fichero (`write_user_env_vars`).
    - Al leer, las variables de entorno `BACKLOG_*` tienen prioridad sobre el
      fichero, igual que en `AppSettings`.
    """

    def __init__(self, env_path: Path | None = None) -> None:
        self._env_path = env_path or get_user_env_file()

    @property
    def env_path(self) -> Path:
        return self._env_path

    def _file_values(self) -> dict[str, str]:
        return read_user_env_vars(self._env_path)

    def get_property(self, key: str) -> str | None:
        value = os.environ.get(key)
        if value is not None:
            return value
        return self._file_values().get(key)

    def set_property(self, key: str, value: str) -> None:
        write_user_env_vars({key: value}, self._env_path)

    def get_keys(self) -> list[str]:
        keys = list(self._file_values().keys())
        for key in _CREDENTIAL_KEYS:
            if key in os.environ and key not in keys:
                keys.append(key)
        return keys


def set_credential(store: CredentialStore, api_key: str, org_domain: str) -> None:
    """Guarda el par de credenciales.

    Args:
        store: almacén destino.
        api_key: API key de Backlog.
        org_domain: dominio del espacio (xx.backlog.com / xx.backlog.jp).
    """

    store.set_property(PROPERTY_KEY_API_KEY, api_key)
    store.set_property(PROPERTY_KEY_ORG_DOMAIN, org_domain)
    logger.info("Credentials saved for %s", org_domain)


def check_credential(store: CredentialStore) -> None:
    """Falla si falta alguna de las dos propiedades."""

    keys = store.get_keys()
    if PROPERTY_KEY_API_KEY not in keys or PROPERTY_KEY_ORG_DOMAIN not in keys:
        raise CredentialsNotSetError()


def load_credentials(store: CredentialStore) -> Credentials:
    check_credential(store)
    return Credentials(
        api_key=store.get_property(PROPERTY_KEY_API_KEY) or "",
        org_domain=store.get_property(PROPERTY_KEY_ORG_DOMAIN) or "",
    )
