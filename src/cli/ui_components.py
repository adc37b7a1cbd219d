"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import (
    Comment,
    Issue,
    IssueType,
    Priority,
    ProjectCategory,
    ProjectInfo,
    SpaceInfo,
    Status,
)


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en modo interactivo)."""

    title = Text("backlog-client", style="bold cyan")
    subtitle = Text("Backlog API v2 • Spaces • Projects • Issues", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_space_panel(space: SpaceInfo) -> Panel:
    body = Text()
    body.append(f"{space.name}\n", style="bold")
    body.append(f"Key: {space.space_key}\n")
    body.append(f"Owner: {space.owner_id}\n")
    body.append(f"Lang/TZ: {space.lang} / {space.timezone}\n")
    body.append(f"Formatting: {space.text_formatting_rule}\n")
    body.append(f"Updated: {space.updated}", style="dim")
    return Panel(body, title=Text("Space", style="bold yellow"), border_style="yellow")


def build_projects_table(projects: Sequence[ProjectInfo]) -> Table:
    table = Table(title="Projects")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Key", style="bright_green", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Archived", style="dim")
    for p in projects:
        table.add_row(str(p.id), p.project_key, p.name, "yes" if p.archived else "no")
    return table


def build_issues_table(issues: Sequence[Issue]) -> Table:
    table = Table(title="Issues")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Priority", style="yellow")
    table.add_column("Status", style="green")
    table.add_column("Summary", style="white")
    for i in issues:
        table.add_row(i.issue_key, i.issue_type.name, i.priority.name, i.status.name, i.summary)
    return table


def build_named_table(
    title: str,
    items: Sequence[Priority | ProjectCategory | IssueType | Status],
) -> Table:
    """Tabla genérica id/nombre (prioridades, categorías, tipos, estados)."""

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Color", style="dim")
    for item in items:
        table.add_row(str(item.id), item.name, getattr(item, "color", None) or "")
    return table


def build_comments_table(comments: Sequence[Comment]) -> Table:
    table = Table(title="Comments")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Created", style="dim", no_wrap=True)
    table.add_column("Content", style="white")
    for c in comments:
        table.add_row(str(c.id), c.created, (c.content or "").strip())
    return table
