"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los payloads JSON de Backlog usan camelCase; los alias permiten exponer
  snake_case en Python sin perder el contrato remoto.

Nota:
- Estos modelos describen *qué* devuelve la API, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class BacklogModel(BaseModel):
    """Base común: alias camelCase y campos desconocidos ignorados."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Credentials(BaseModel):
    """Par de credenciales persistido (API key + dominio de la organización)."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(default="", description="API key de Backlog.")
    org_domain: str = Field(
        default="",
        description="Dominio del espacio (xx.backlog.com / xx.backlog.jp).",
    )


class SpaceInfo(BacklogModel):
    """GET /space"""

    space_key: str
    name: str
    owner_id: int
    lang: str
    timezone: str
    report_send_time: str
    text_formatting_rule: str
    created: str
    updated: str


class ProjectInfo(BacklogModel):
    """GET /projects/:projectIdOrKey"""

    id: int
    project_key: str
    name: str
    chart_enabled: bool
    use_resolved_for_chart: bool
    project_leader_can_edit_project_leader: bool
    use_wiki: bool
    use_file_sharing: bool
    use_wiki_tree_view: bool
    use_original_image_size_at_wiki: bool
    use_subversion: bool
    use_git: bool
    text_formatting_rule: str
    archived: bool
    display_order: int
    use_dev_attributes: bool


class ProjectCategory(BacklogModel):
    id: int
    project_id: int
    name: str
    display_order: int


class IssueType(BacklogModel):
    id: int
    project_id: int
    name: str
    display_order: int
    color: str
    template_summary: str | None = Field(
        default=None,
        description="Plantilla de resumen (null si el tipo no define plantilla).",
    )
    template_description: str | None = Field(
        default=None,
        description="Plantilla de descripción (null si el tipo no define plantilla).",
    )


class Priority(BacklogModel):
    id: int
    name: str


class Status(BacklogModel):
    id: int
    project_id: int
    name: str
    display_order: int
    color: str


class Issue(BacklogModel):
    """Issue con sus referencias embebidas (tipo, prioridad, estado)."""

    id: int
    project_id: int
    issue_key: str
    key_id: int
    issue_type: IssueType
    summary: str
    description: str | None = None
    priority: Priority
    status: Status


class Comment(BacklogModel):
    """Comentario de un issue (GET /issues/:key/comments y POST de alta)."""

    id: int
    project_id: int | None = None
    issue_id: int | None = None
    content: str | None = None
    created: str
    updated: str


class AddCommentResponse(Comment):
    pass


class PostAttachmentResponse(BacklogModel):
    id: int
    name: str
    size: int


class LinkSharedFileToIssueResponse(BacklogModel):
    id: int
    name: str
    size: int


class QueryParamsModel(BacklogModel):
    """Parámetros de request que viajan en el query string."""

    def to_query_params(self) -> dict[str, Any]:
        """Devuelve los parámetros con sus claves remotas, sin opcionales vacíos."""

        return self.model_dump(by_alias=True, exclude_none=True)


class AddIssueParams(QueryParamsModel):
    project_id: int
    issue_type_id: int
    priority_id: int
    parent_issue_id: int | None = None
    description: str | None = None
    start_date: str | None = Field(default=None, description="yyyy-MM-dd")
    due_date: str | None = Field(default=None, description="yyyy-MM-dd")


class AddCommentParams(QueryParamsModel):
    notified_user_ids: list[int] = Field(default_factory=list, alias="notifiedUserId[]")
    attachment_ids: list[int] = Field(default_factory=list, alias="attachmentId[]")


class LinkSharedFileParams(QueryParamsModel):
    file_ids: list[int] = Field(default_factory=list, alias="fileId[]")
