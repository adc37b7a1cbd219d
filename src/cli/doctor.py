"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.backlog_client import client_from_store
from core.config import AppSettings
from core.credentials import (
    PROPERTY_KEY_API_KEY,
    PROPERTY_KEY_ORG_DOMAIN,
    EnvFileCredentialStore,
)
from core.domain.errors import BacklogError
from core.interfaces.credential_store import CredentialStore

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(store: CredentialStore, settings: AppSettings) -> tuple[bool, str]:
    try:
        with client_from_store(store, settings=settings) as client:
            space = client.get_space()
        return True, f"space '{space.space_key}'"
    except (BacklogError, httpx.HTTPError) as exc:
        return False, str(exc)


def build_report(store: CredentialStore, settings: AppSettings) -> tuple[Table, bool]:
    table = Table(title="backlog-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    keys = store.get_keys()
    has_key = PROPERTY_KEY_API_KEY in keys
    has_domain = PROPERTY_KEY_ORG_DOMAIN in keys
    table.add_row("API key", "OK" if has_key else "MISSING", "set" if has_key else "run `backlog setup`")
    table.add_row(
        "Org domain",
        "OK" if has_domain else "MISSING",
        store.get_property(PROPERTY_KEY_ORG_DOMAIN) or "run `backlog setup`",
    )
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    if not (has_key and has_domain):
        table.add_row("API connectivity", "SKIPPED", "credentials not configured")
        return table, False

    ok_api, detail_api = _check_api(store, settings)
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)
    return table, ok_api


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    table, ok = build_report(EnvFileCredentialStore(), AppSettings())
    _console.print(table)
    if not ok:
        raise typer.Exit(code=1)
