"""CLI `backlog` (Typer + Rich).

Cada comando abre un cliente desde el almacén de credenciales del usuario,
hace una única llamada y presenta el resultado como tabla o JSON.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

import httpx
import typer
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler

from adapters.backlog_client import BacklogClient, client_from_store
from adapters.json_exporter import export_records_json, render_records_json
from cli import doctor
from cli.ui_components import (
    build_comments_table,
    build_issues_table,
    build_named_table,
    build_projects_table,
    build_space_panel,
    print_banner,
)
from core.config import AppSettings
from core.credentials import EnvFileCredentialStore, set_credential
from core.domain.errors import BacklogError
from core.domain.models import AddCommentParams, AddIssueParams

app = typer.Typer(no_args_is_help=True, help="Backlog API v2 client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

_JSON_OPTION = typer.Option(False, "--json", help="Print raw JSON instead of tables.")
_OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Also write the JSON result to this file.")


def _open_client() -> BacklogClient:
    return client_from_store(EnvFileCredentialStore(), settings=AppSettings())


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except (BacklogError, ValueError, httpx.HTTPError) as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _emit(
    records: BaseModel | Sequence[BaseModel],
    renderable: object,
    *,
    as_json: bool,
    output: Path | None,
) -> None:
    if output is not None:
        path = export_records_json(records=records, output_path=output)
        _err_console.print(f"[green]Saved JSON to:[/green] {path}")
    if as_json:
        _console.print_json(render_records_json(records))
    else:
        _console.print(renderable)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


@app.command()
def setup() -> None:
    """Interactive credential setup (stored in the user config .env)."""

    print_banner(_console)
    org_domain = typer.prompt("Organization domain (xx.backlog.com / xx.backlog.jp)").strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    if not org_domain or not api_key:
        raise typer.BadParameter("api key and organization domain are required")

    store = EnvFileCredentialStore()
    set_credential(store, api_key, org_domain)
    _console.print(f"[green]Saved credentials to:[/green] {store.env_path}")


@app.command()
def space(as_json: bool = _JSON_OPTION, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    """Show space information."""

    with _handle_errors(), _open_client() as client:
        info = client.get_space()
    _emit(info, build_space_panel(info), as_json=as_json, output=output)


@app.command()
def priorities(as_json: bool = _JSON_OPTION, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    """List issue priorities."""

    with _handle_errors(), _open_client() as client:
        items = client.get_priorities()
    _emit(items, build_named_table("Priorities", items), as_json=as_json, output=output)


@app.command()
def projects(as_json: bool = _JSON_OPTION, output: Optional[Path] = _OUTPUT_OPTION) -> None:
    """List projects visible to the API key."""

    with _handle_errors(), _open_client() as client:
        items = client.get_projects()
    _emit(items, build_projects_table(items), as_json=as_json, output=output)


@app.command()
def project(
    project_id_or_key: str = typer.Argument(..., help="Project ID or key."),
    as_json: bool = _JSON_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """Show a single project."""

    with _handle_errors(), _open_client() as client:
        info = client.get_project(project_id_or_key)
    _emit(info, build_projects_table([info]), as_json=as_json, output=output)


@app.command()
def categories(
    project_id_or_key: str = typer.Argument(..., help="Project ID or key."),
    as_json: bool = _JSON_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """List project categories."""

    with _handle_errors(), _open_client() as client:
        items = client.get_project_categories(project_id_or_key)
    _emit(items, build_named_table("Categories", items), as_json=as_json, output=output)


@app.command(name="issue-types")
def issue_types(
    project_id_or_key: str = typer.Argument(..., help="Project ID or key."),
    as_json: bool = _JSON_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """List project issue types."""

    with _handle_errors(), _open_client() as client:
        items = client.get_project_issue_types(project_id_or_key)
    _emit(items, build_named_table("Issue types", items), as_json=as_json, output=output)


@app.command()
def statuses(
    project_id_or_key: str = typer.Argument(..., help="Project ID or key."),
    as_json: bool = _JSON_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """List project statuses."""

    with _handle_errors(), _open_client() as client:
        items = client.get_project_statuses(project_id_or_key)
    _emit(items, build_named_table("Statuses", items), as_json=as_json, output=output)


@app.command()
def issues(
    project_ids: Optional[List[int]] = typer.Option(None, "--project-id", "-p", help="Repeatable."),
    as_json: bool = _JSON_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """List issues, optionally filtered by project."""

    with _handle_errors(), _open_client() as client:
        items = client.get_issues(project_ids or [])
    _emit(items, build_issues_table(items), as_json=as_json, output=output)


@app.command()
def issue(
    issue_id_or_key: str = typer.Argument(..., help="Issue ID or key (e.g. PRJ-12)."),
    as_json: bool = _JSON_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """Show a single issue."""

    with _handle_errors(), _open_client() as client:
        item = client.get_issue(issue_id_or_key)
    _emit(item, build_issues_table([item]), as_json=as_json, output=output)


@app.command()
def comments(
    issue_id_or_key: str = typer.Argument(..., help="Issue ID or key."),
    as_json: bool = _JSON_OPTION,
    output: Optional[Path] = _OUTPUT_OPTION,
) -> None:
    """List comments of an issue."""

    with _handle_errors(), _open_client() as client:
        items = client.get_issue_comments(issue_id_or_key)
    _emit(items, build_comments_table(items), as_json=as_json, output=output)


@app.command(name="add-issue")
def add_issue(
    summary: str = typer.Argument(..., help="Issue summary."),
    project_id: int = typer.Option(..., "--project-id"),
    issue_type_id: int = typer.Option(..., "--issue-type-id"),
    priority_id: int = typer.Option(..., "--priority-id"),
    parent_issue_id: Optional[int] = typer.Option(None, "--parent-issue-id"),
    description: Optional[str] = typer.Option(None, "--description"),
    start_date: Optional[str] = typer.Option(None, "--start-date", help="yyyy-MM-dd"),
    due_date: Optional[str] = typer.Option(None, "--due-date", help="yyyy-MM-dd"),
) -> None:
    """Create an issue."""

    params = AddIssueParams(
        project_id=project_id,
        issue_type_id=issue_type_id,
        priority_id=priority_id,
        parent_issue_id=parent_issue_id,
        description=description,
        start_date=start_date,
        due_date=due_date,
    )
    with _handle_errors(), _open_client() as client:
        client.add_issue(summary, params)
    _console.print(f"[green]Issue created:[/green] {summary}")


@app.command(name="add-comment")
def add_comment(
    issue_id_or_key: str = typer.Argument(..., help="Issue ID or key."),
    content: str = typer.Argument(..., help="Comment body."),
    notify: Optional[List[int]] = typer.Option(None, "--notify", help="User ID to notify. Repeatable."),
    attachments: Optional[List[int]] = typer.Option(None, "--attachment", help="Attachment ID. Repeatable."),
    as_json: bool = _JSON_OPTION,
) -> None:
    """Add a comment to an issue."""

    params = AddCommentParams(notified_user_ids=notify or [], attachment_ids=attachments or [])
    with _handle_errors(), _open_client() as client:
        created = client.add_comment(issue_id_or_key, content, params)
    if as_json:
        _console.print_json(render_records_json(created))
    else:
        _console.print(f"[green]Comment {created.id} added to {issue_id_or_key}[/green]")


@app.command()
def attach(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    name: Optional[str] = typer.Option(None, "--name", help="Attachment name (defaults to file name)."),
) -> None:
    """Upload a file to the space; prints the attachment ID for `add-comment --attachment`."""

    with _handle_errors(), _open_client() as client:
        uploaded = client.post_attachment(file, name or file.name)
    _console.print(f"[green]Attachment {uploaded.id}[/green] {uploaded.name} ({uploaded.size} bytes)")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
