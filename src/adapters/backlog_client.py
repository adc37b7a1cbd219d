"""Cliente de la API v2 de Backlog.

Responsabilidad:
- Componer la URL autenticada de cada endpoint (ver `http_client`).
- Emitir una única request y validar el status esperado.
- Normalizar el JSON como modelos del dominio.

Docs: https://developer.nulab.com/docs/backlog/
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, BinaryIO, Mapping, Sequence, TypeVar

import httpx
from pydantic import TypeAdapter

from adapters.http_client import (
    base_url_for_domain,
    base_url_for_org_name,
    build_client,
    build_request_url,
    expect_status,
    send_request,
)
from core.config import AppSettings
from core.credentials import load_credentials
from core.domain.models import (
    AddCommentParams,
    AddCommentResponse,
    AddIssueParams,
    Comment,
    Issue,
    IssueType,
    LinkSharedFileParams,
    LinkSharedFileToIssueResponse,
    PostAttachmentResponse,
    Priority,
    ProjectCategory,
    ProjectInfo,
    QueryParamsModel,
    SpaceInfo,
    Status,
)
from core.interfaces.credential_store import CredentialStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

AttachmentSource = bytes | BinaryIO | Path


def _require(value: str | int | None, name: str) -> str:
    if value is None or value == "":
        raise ValueError(f"{name} is required")
    return str(value)


def _params(params: QueryParamsModel | Mapping[str, Any] | None) -> dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, QueryParamsModel):
        return params.to_query_params()
    return dict(params)


class BacklogClient:
    """Cliente síncrono: una request por llamada, sin reintentos ni paginación."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        *,
        settings: AppSettings | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._http = http_client or build_client(settings)
        self._owns_http = http_client is None

    @property
    def base_url(self) -> str:
        return self._base_url

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "BacklogClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Plumbing
    # ------------------------------------------------------------------ #

    def _url(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        return build_request_url(self._base_url, self._api_key, path, params)

    def _get(self, path: str, action: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        response = send_request(self._http, "get", self._url(path, params))
        return expect_status(response, 200, action)

    def _post(
        self,
        path: str,
        action: str,
        *,
        expected: int,
        params: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        response = send_request(
            self._http,
            "post",
            self._url(path, params),
            payload=payload,
            files=files,
        )
        return expect_status(response, expected, action)

    @staticmethod
    def _parse(response: httpx.Response, shape: type[T]) -> T:
        return TypeAdapter(shape).validate_json(response.content)

    # ------------------------------------------------------------------ #
    # Space
    # ------------------------------------------------------------------ #

    def get_space(self) -> SpaceInfo:
        """Información del espacio.

        https://developer.nulab.com/docs/backlog/api/2/get-space/
        """

        res = self._get("/space", "get space")
        return self._parse(res, SpaceInfo)

    def get_priorities(self) -> list[Priority]:
        """https://developer.nulab.com/docs/backlog/api/2/get-priority-list/"""

        res = self._get("/priorities", "get priorities")
        return self._parse(res, list[Priority])

    def post_attachment(self, file: AttachmentSource, filename: str) -> PostAttachmentResponse:
        """Sube un fichero al espacio para adjuntarlo luego (`attachmentId[]`).

        https://developer.nulab.com/docs/backlog/api/2/post-attachment-file/

        Args:
            file: contenido (bytes), fichero abierto en binario o `Path`.
            filename: nombre con el que se registra el adjunto.
        """

        _require(filename, "filename")
        if isinstance(file, Path):
            content: bytes | BinaryIO = file.read_bytes()
        else:
            content = file
        res = self._post(
            "/space/attachment",
            "post attachment",
            expected=200,
            files={"file": (filename, content)},
        )
        return self._parse(res, PostAttachmentResponse)

    # ------------------------------------------------------------------ #
    # Projects
    # ------------------------------------------------------------------ #

    def get_projects(self) -> list[ProjectInfo]:
        res = self._get("/projects", "get projects")
        return self._parse(res, list[ProjectInfo])

    def get_project(self, project_id_or_key: str | int = "") -> ProjectInfo:
        """https://developer.nulab.com/docs/backlog/api/2/get-project/"""

        key = _require(project_id_or_key, "projectIdOrKey")
        res = self._get(f"/projects/{key}", "get project")
        return self._parse(res, ProjectInfo)

    def get_project_categories(self, project_id_or_key: str | int = "") -> list[ProjectCategory]:
        key = _require(project_id_or_key, "projectIdOrKey")
        res = self._get(f"/projects/{key}/categories", "get project categories")
        return self._parse(res, list[ProjectCategory])

    def get_project_issue_types(self, project_id_or_key: str | int = "") -> list[IssueType]:
        key = _require(project_id_or_key, "projectIdOrKey")
        res = self._get(f"/projects/{key}/issueTypes", "get project issue types")
        return self._parse(res, list[IssueType])

    def get_project_statuses(self, project_id_or_key: str | int = "") -> list[Status]:
        """https://developer.nulab.com/docs/backlog/api/2/get-status-list-of-project/"""

        key = _require(project_id_or_key, "projectIdOrKey")
        res = self._get(f"/projects/{key}/statuses", "get project statuses")
        return self._parse(res, list[Status])

    # ------------------------------------------------------------------ #
    # Issues
    # ------------------------------------------------------------------ #

    def get_issues(self, project_ids: Sequence[int] = ()) -> list[Issue]:
        """Issues de uno o varios proyectos (`projectId[]`).

        https://developer.nulab.com/docs/backlog/api/2/get-issue-list/
        """

        res = self._get("/issues", "get issues", {"projectId[]": list(project_ids)})
        return self._parse(res, list[Issue])

    def get_issue(self, issue_id_or_key: str | int = "") -> Issue:
        key = _require(issue_id_or_key, "issueIdOrKey")
        res = self._get(f"/issues/{key}", "get issue")
        return self._parse(res, Issue)

    def add_issue(
        self,
        summary: str = "",
        params: AddIssueParams | Mapping[str, Any] | None = None,
    ) -> None:
        """Crea un issue. `summary` va en el body; el resto en el query string.

        https://developer.nulab.com/docs/backlog/api/2/add-issue/
        """

        self._post(
            "/issues",
            "add issue",
            expected=201,
            params=_params(params),
            payload={"summary": summary},
        )
        logger.info("Issue created: %s", summary)

    def get_issue_comments(self, issue_id_or_key: str | int = "") -> list[Comment]:
        key = _require(issue_id_or_key, "issueIdOrKey")
        res = self._get(f"/issues/{key}/comments", "get comments")
        return self._parse(res, list[Comment])

    def add_comment(
        self,
        issue_id_or_key: str | int = "",
        content: str = "",
        params: AddCommentParams | Mapping[str, Any] | None = None,
    ) -> AddCommentResponse:
        """https://developer.nulab.com/docs/backlog/api/2/add-comment/"""

        key = _require(issue_id_or_key, "issueIdOrKey")
        res = self._post(
            f"/issues/{key}/comments",
            "add comment",
            expected=201,
            params=_params(params),
            payload={"content": content},
        )
        return self._parse(res, AddCommentResponse)

    def link_shared_files(
        self,
        issue_id_or_key: str | int = "",
        params: LinkSharedFileParams | Mapping[str, Any] | None = None,
    ) -> list[LinkSharedFileToIssueResponse]:
        """https://developer.nulab.com/docs/backlog/api/2/link-shared-files-to-issue/"""

        key = _require(issue_id_or_key, "issueIdOrKey")
        res = self._post(
            f"/issues/{key}/sharedFiles",
            "link shared files",
            expected=200,
            params=_params(params),
        )
        return self._parse(res, list[LinkSharedFileToIssueResponse])


def create_client(
    api_key: str,
    org_name: str,
    *,
    settings: AppSettings | None = None,
    http_client: httpx.Client | None = None,
) -> BacklogClient:
    """Cliente para `https://<org_name>.backlog.com`."""

    return BacklogClient(
        api_key,
        base_url_for_org_name(org_name),
        settings=settings,
        http_client=http_client,
    )


def client_from_store(
    store: CredentialStore,
    *,
    settings: AppSettings | None = None,
    http_client: httpx.Client | None = None,
) -> BacklogClient:
    """Cliente a partir del almacén de credenciales (dominio completo).

    Raises:
        CredentialsNotSetError: si falta la API key o el dominio.
    """

    credentials = load_credentials(store)
    return BacklogClient(
        credentials.api_key,
        base_url_for_domain(credentials.org_domain),
        settings=settings,
        http_client=http_client,
    )
