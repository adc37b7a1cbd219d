"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y logging de todas las llamadas a la API.
- Facilita testeo: se puede inyectar un `httpx.Client` con `MockTransport`.

Autenticación:
- Backlog usa `apiKey` en el query string, así que la URL se construye aquí
  a mano (orden estable, arrays como claves repetidas).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping
from urllib.parse import quote

import httpx

from core.config import AppSettings
from core.domain.errors import BacklogApiError, MethodNotAllowedError

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("get", "post")

# Caracteres que `encodeURIComponent` deja sin escapar (además de alfanuméricos).
_URI_COMPONENT_SAFE = "-_.!~*'()"

_API_KEY_RE = re.compile(r"(apiKey=)[^&]*")


def build_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults del proyecto.

    Nota: no sigue redirects ni lanza excepciones por status; el chequeo de
    códigos lo hace cada endpoint con `expect_status`.
    """

    settings = settings or AppSettings()
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "application/json",
        },
        transport=transport,
    )


def base_url_for_domain(org_domain: str) -> str:
    return f"https://{org_domain}/api/v2"


def base_url_for_org_name(org_name: str) -> str:
    return base_url_for_domain(f"{org_name}.backlog.com")


def encode_uri_component(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def encode_query(params: Mapping[str, Any]) -> list[str]:
    """Codifica pares `key=value`; listas/tuplas se expanden como claves repetidas."""

    parts: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                parts.append(f"{encode_uri_component(key)}={encode_uri_component(item)}")
        else:
            parts.append(f"{encode_uri_component(key)}={encode_uri_component(value)}")
    return parts


def build_request_url(
    base_url: str,
    api_key: str,
    path: str,
    params: Mapping[str, Any] | None = None,
) -> str:
    """`<base_url><path>?apiKey=...&<params>` con `apiKey` siempre primero."""

    query = [f"{encode_uri_component('apiKey')}={encode_uri_component(api_key)}"]
    query.extend(encode_query(params or {}))
    return f"{base_url}{path}?{'&'.join(query)}"


def redact_url(url: str) -> str:
    return _API_KEY_RE.sub(r"\1***", url)


def send_request(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    payload: Mapping[str, Any] | None = None,
    files: Mapping[str, Any] | None = None,
) -> httpx.Response:
    """Despacha una única request GET/POST.

    Reglas:
    - Solo `get` y `post`; el resto falla antes de tocar la red.
    - En POST, `payload` va como form data y `files` como multipart.
    """

    verb = method.lower()
    if verb not in ALLOWED_METHODS:
        raise MethodNotAllowedError(method)

    logger.debug("%s %s", verb.upper(), redact_url(url))
    if verb == "post":
        response = client.post(url, data=dict(payload or {}), files=files)
    else:
        response = client.get(url)
    logger.debug("-> HTTP %s", response.status_code)
    return response


def expect_status(response: httpx.Response, expected: int, action: str) -> httpx.Response:
    """Lanza `BacklogApiError` (con el body crudo) si el status no es el esperado."""

    if response.status_code != expected:
        logger.warning("Failed to %s (HTTP %s)", action, response.status_code)
        raise BacklogApiError(action, response.status_code, response.text)
    return response
