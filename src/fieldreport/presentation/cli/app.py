"""fieldreport CLI application using Typer.

Every command builds its own application container, runs one action
and closes it again. Commands that act on behalf of a user sign in
first with ``--username``/``--password``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from fieldreport.domain.shared import DomainException
from fieldreport.presentation.container import AppContainer
from fieldreport.presentation.controllers import CATEGORIES, STATUS_FILTERS
from fieldreport.presentation.logging_config import configure_logging

T = TypeVar("T")

app = typer.Typer(
    name="fieldreport",
    help="fieldreport - field incident reporting CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(name="db", help="Local database utilities", no_args_is_help=True)
user_app = typer.Typer(name="user", help="User accounts", no_args_is_help=True)
incident_app = typer.Typer(name="incident", help="Incident reports", no_args_is_help=True)
remote_app = typer.Typer(name="remote", help="Remote mirror endpoint", no_args_is_help=True)
app.add_typer(db_app)
app.add_typer(user_app)
app.add_typer(incident_app)
app.add_typer(remote_app)

UsernameOption = typer.Option(
    ...,
    "--username",
    "-u",
    envvar="FIELDREPORT_USERNAME",
    help="Account to act as",
)
PasswordOption = typer.Option(
    ...,
    "--password",
    "-p",
    envvar="FIELDREPORT_PASSWORD",
    prompt=True,
    hide_input=True,
    help="Password of the account",
)


@app.callback()
def main() -> None:
    """Record incidents locally and mirror them when online."""
    configure_logging()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(action: Callable[[AppContainer], Awaitable[T]]) -> T:
    """Run one async action inside a freshly started container."""

    async def runner() -> T:
        async with AppContainer.from_settings() as container:
            return await action(container)

    try:
        return asyncio.run(runner())
    except DomainException as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise typer.Exit(code=1) from e


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]{message}[/red]")
    return typer.Exit(code=1)


async def _sign_in(container: AppContainer, username: str, password: str) -> None:
    controller = container.login_controller()
    controller.username = username
    controller.password = password
    if not await controller.login():
        raise _fail(controller.error_message)


def _synced_mark(mirrored: bool) -> str:
    return "[green]yes[/green]" if mirrored else "[yellow]no[/yellow]"


# ---------------------------------------------------------------------------
# db
# ---------------------------------------------------------------------------


@db_app.command("init")
def db_init() -> None:
    """Create the local database and the bootstrap account (idempotent)."""

    async def action(container: AppContainer) -> str:
        return container.store.database_url

    url = _run(action)
    console.print(f"[green]Database ready[/green] [dim]({url})[/dim]")


# ---------------------------------------------------------------------------
# user
# ---------------------------------------------------------------------------


@user_app.command("register")
def user_register(
    username: str = typer.Argument(..., help="New username"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
    ),
    full_name: Optional[str] = typer.Option(None, "--full-name", help="Display name"),
    email: Optional[str] = typer.Option(None, "--email", help="Contact email"),
) -> None:
    """Register a new account."""

    async def action(container: AppContainer) -> tuple[bool, str]:
        controller = container.register_controller()
        ok = await controller.register(username, password, full_name, email)
        return ok, controller.success_message if ok else controller.error_message

    ok, message = _run(action)
    if not ok:
        raise _fail(message)
    console.print(f"[green]{message}[/green]")


# ---------------------------------------------------------------------------
# incident
# ---------------------------------------------------------------------------


@incident_app.command("create")
def incident_create(  # NOQA: PLR0913
    title: str = typer.Option(..., "--title", "-t"),
    description: str = typer.Option(..., "--description", "-d"),
    category: str = typer.Option(
        CATEGORIES[0],
        "--category",
        "-c",
        help=f"One of: {', '.join(CATEGORIES)}",
    ),
    priority: str = typer.Option("Medium", "--priority", help="Low, Medium, High or Critical"),
    photo: Optional[str] = typer.Option(None, "--photo", help="Image file to attach"),
    latitude: Optional[float] = typer.Option(None, "--lat"),
    longitude: Optional[float] = typer.Option(None, "--lon"),
    location_name: Optional[str] = typer.Option(None, "--location-name"),
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """Record a new incident and try to mirror it right away."""

    async def action(container: AppContainer) -> tuple[Optional[int], str]:
        await _sign_in(container, username, password)
        controller = container.create_incident_controller()
        controller.title = title
        controller.description = description
        controller.category = category
        controller.priority = priority

        if photo and not controller.attach_photo(photo):
            return None, controller.error_message
        if latitude is not None or longitude is not None:
            if latitude is None or longitude is None:
                return None, "Both --lat and --lon are needed for a location"
            if not controller.set_location(latitude, longitude, location_name):
                return None, controller.error_message

        incident = await controller.save()
        if incident is None:
            controller.remove_photo()
            return None, controller.error_message
        return incident.id, controller.message

    incident_id, message = _run(action)
    if incident_id is None:
        raise _fail(message)
    console.print(f"[green]{message}[/green] (id {incident_id})")


@incident_app.command("list")
def incident_list(
    status: str = typer.Option(
        STATUS_FILTERS[0],
        "--status",
        "-s",
        help=f"One of: {', '.join(STATUS_FILTERS)}",
    ),
    search: str = typer.Option("", "--search", "-q", help="Text in title, description or category"),
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """List incidents, newest first."""

    async def action(container: AppContainer):
        await _sign_in(container, username, password)
        controller = container.incident_list_controller()
        await controller.load()
        controller.set_status_filter(status)
        controller.set_search_text(search)
        return controller

    controller = _run(action)
    if controller.error_message:
        raise _fail(controller.error_message)
    if controller.is_empty:
        console.print(f"[dim]{controller.empty_message}[/dim]")
        return

    table = Table(title=f"Incidents ({controller.total_count})")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Status")
    table.add_column("Priority")
    table.add_column("Category")
    table.add_column("Synced")
    table.add_column("Created")
    for incident in controller.incidents:
        table.add_row(
            str(incident.id),
            incident.title,
            incident.status.label,
            incident.priority.value,
            incident.category or "-",
            _synced_mark(incident.mirrored),
            incident.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


@incident_app.command("show")
def incident_show(
    incident_id: int = typer.Argument(...),
    share: bool = typer.Option(False, "--share", help="Print the shareable summary only"),
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """Show one incident."""

    async def action(container: AppContainer):
        await _sign_in(container, username, password)
        controller = container.incident_detail_controller()
        await controller.open(incident_id)
        return controller

    controller = _run(action)
    incident = controller.incident
    if incident is None:
        raise _fail(controller.error_message)

    if share:
        console.print(controller.share_text(), markup=False)
        return

    console.print(f"[bold]{controller.page_title}[/bold]  {incident.title}")
    console.print(f"  Status:      {incident.status.label}")
    console.print(f"  Priority:    {incident.priority.value}")
    console.print(f"  Category:    {incident.category or '-'}")
    console.print(f"  Location:    {incident.location_name or incident.formatted_location}")
    console.print(f"  Photo:       {incident.photo_path or '-'}")
    console.print(f"  Created:     {incident.created_at:%Y-%m-%d %H:%M}")
    if incident.updated_at is not None:
        console.print(f"  Updated:     {incident.updated_at:%Y-%m-%d %H:%M}")
    remote = f" (remote id {incident.remote_id})" if incident.mirrored else ""
    console.print(f"  Synced:      {_synced_mark(incident.mirrored)}{remote}")
    console.print()
    console.print(incident.description, markup=False)


@incident_app.command("status")
def incident_status(
    incident_id: int = typer.Argument(...),
    new_status: str = typer.Argument(..., help="Pending, InProgress or Resolved"),
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """Change the status of an incident."""

    async def action(container: AppContainer) -> tuple[bool, str]:
        await _sign_in(container, username, password)
        controller = container.incident_detail_controller()
        if not await controller.open(incident_id):
            return False, controller.error_message
        ok = await controller.save_changes(status=new_status)
        return ok, controller.message if ok else controller.error_message

    ok, message = _run(action)
    if not ok:
        raise _fail(message)
    console.print(f"[green]{message}[/green]")


@incident_app.command("delete")
def incident_delete(
    incident_id: int = typer.Argument(...),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """Delete an incident and its photo."""
    if not yes:
        typer.confirm(f"Delete incident {incident_id}? This cannot be undone", abort=True)

    async def action(container: AppContainer) -> tuple[bool, str]:
        await _sign_in(container, username, password)
        controller = container.incident_detail_controller()
        if not await controller.open(incident_id):
            return False, controller.error_message
        ok = await controller.delete()
        return ok, controller.message if ok else controller.error_message

    ok, message = _run(action)
    if not ok:
        raise _fail(message)
    console.print(f"[green]{message}[/green]")


@incident_app.command("sync")
def incident_sync(
    incident_id: int = typer.Argument(...),
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """Push one incident to the remote mirror."""

    async def action(container: AppContainer) -> tuple[bool, str]:
        await _sign_in(container, username, password)
        controller = container.incident_detail_controller()
        if not await controller.open(incident_id):
            return False, controller.error_message
        ok = await controller.sync_with_remote()
        return ok, controller.message if ok else controller.error_message

    ok, message = _run(action)
    if not ok:
        raise _fail(message)
    console.print(f"[green]{message}[/green]")


# ---------------------------------------------------------------------------
# sync / stats
# ---------------------------------------------------------------------------


@app.command("sync")
def sync(
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """Push every unsynced incident to the remote mirror."""

    async def action(container: AppContainer):
        await _sign_in(container, username, password)
        controller = container.dashboard_controller()
        summary = await controller.sync()
        return summary, controller.message

    summary, message = _run(action)
    if summary is None or summary.error is not None:
        raise _fail(message)
    style = "yellow" if summary.failed else "green"
    console.print(f"[{style}]{message}[/{style}]")
    if summary.total:
        console.print(f"[dim]{summary.synced} synced, {summary.failed} failed[/dim]")


@app.command("stats")
def stats(
    username: str = UsernameOption,
    password: str = PasswordOption,
) -> None:
    """Show incident counters and connectivity."""

    async def action(container: AppContainer):
        await _sign_in(container, username, password)
        controller = container.dashboard_controller()
        await controller.load()
        return controller

    controller = _run(action)
    console.print(f"[bold]{controller.welcome_message}[/bold]")

    table = Table(show_header=False)
    table.add_column("Counter")
    table.add_column("Value", justify="right")
    table.add_row("Total", str(controller.total_incidents))
    table.add_row("Pending", str(controller.pending_incidents))
    table.add_row("Resolved", str(controller.resolved_incidents))
    table.add_row("Synced", str(controller.synced_incidents))
    console.print(table)

    connection = "[green]online[/green]" if controller.has_connection else "[yellow]offline[/yellow]"
    console.print(f"Mirror: {connection}")


# ---------------------------------------------------------------------------
# remote
# ---------------------------------------------------------------------------


@remote_app.command("list")
def remote_list(
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Rows to show"),
) -> None:
    """List what the remote endpoint currently holds."""

    async def action(container: AppContainer):
        return await container.mirror.fetch_remote_incidents()

    posts = _run(action)
    if not posts:
        console.print("[yellow]Remote endpoint returned nothing (offline or unreachable)[/yellow]")
        return

    table = Table(title=f"Remote incidents ({len(posts)})")
    table.add_column("ID", justify="right")
    table.add_column("User", justify="right")
    table.add_column("Title")
    for post in posts[:limit]:
        table.add_row(str(post.id), str(post.user_id or "-"), post.title)
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
