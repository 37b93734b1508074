"""Command-line interface for bookart.

Built with Typer for commands and Rich for output.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .auth.manager import UserManager
from .auth.schemas import UserCreate, UserRole
from .config import get_config
from .db import get_db
from .log import configure_logging
from .search.manager import DEFAULT_LIMIT, SearchManager

# Create the main app
app = typer.Typer(
    name="bookart",
    help="Book Art catalog: series, books, characters and their artwork.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


# ============================================================================
# Commands
# ============================================================================


@app.command("init-db")
def init_db() -> None:
    """Create the database tables."""
    db = get_db()
    location = db.db_path or db.url
    print_success(f"Database ready at {location}")


@app.command("create-user")
def create_user(
    email: str = typer.Argument(..., help="Account email"),
    username: str = typer.Option(..., "--username", "-u", help="Display name"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Account password"
    ),
    admin: bool = typer.Option(False, "--admin", help="Grant the admin role"),
) -> None:
    """Create an account, optionally with admin rights."""
    manager = UserManager(get_db())
    role = UserRole.ADMIN if admin else UserRole.USER

    try:
        user = manager.register(
            UserCreate(email=email, password=password, username=username), role=role
        )
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Created {user.role.value} account {user.email} ({user.id})")


@app.command()
def promote(
    email: str = typer.Argument(..., help="Account email"),
    demote: bool = typer.Option(False, "--demote", help="Revoke the admin role instead"),
) -> None:
    """Grant or revoke the admin role."""
    role = UserRole.USER if demote else UserRole.ADMIN
    user = UserManager(get_db()).set_role(email, role)
    if user is None:
        print_error(f"No account with email: {email}")
        raise typer.Exit(1)

    print_success(f"{user.email} is now {user.role.value}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to search for"),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", "-l", help="Max results per type"),
) -> None:
    """Search the catalog."""
    try:
        results = SearchManager(get_db()).search(query, limit)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if results.total_count == 0:
        console.print(f"[dim]No results for '{results.query}'.[/dim]")
        return

    for group, hits in results.results:
        if not hits:
            continue
        table = Table(title=group.capitalize(), show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan", max_width=40)
        table.add_column("In", style="green", max_width=30)
        table.add_column("ID", style="dim")
        for hit in hits:
            table.add_row(hit.name, hit.parent_name or "-", hit.id)
        console.print(table)

    console.print(f"[dim]{results.total_count} result(s) for '{results.query}'[/dim]")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port"),
    debug: bool = typer.Option(False, "--debug", help="Enable the Flask debugger"),
) -> None:
    """Run the HTTP API."""
    from .web import run_server

    config = get_config()
    configure_logging(config.log_level)
    for problem in config.validate():
        print_warning(problem)

    run_server(host=host, port=port, debug=debug)


if __name__ == "__main__":
    app()
