"""
HOOPSTATS - CLI Admin Commands
Command-line interface for serving, database upkeep and cache refreshes
"""

import asyncio
import json
import logging
import subprocess
import sys
from typing import List, Optional, Tuple

import click
import httpx
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()
logger = logging.getLogger(__name__)

# Routes exercised by the smoke check and the status each must answer, in call order
SMOKE_CHECKS = [
    ("/", 200),
    ("/health", 200),
    ("/api/players", 200),
    ("/api/players/top/10", 200),
    ("/api/players/search/james", 200),
    ("/api/teams", 200),
    ("/api/teams/random/10", 200),
    ("/api/games", 200),
    ("/api/games/latest", 200),
    ("/api/invalid", 404),
]


def _setup_logging() -> None:
    from hoopstats.core.config import settings

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@click.group()
def cli():
    """HOOPSTATS - NBA data cache"""
    _setup_logging()


# ============== Server Command ==============

@cli.command()
@click.option("--host", "-h", default=None, help="Host to bind")
@click.option("--port", "-p", default=None, type=int, help="Port to bind")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Start the API server"""
    from hoopstats.core.config import settings
    from hoopstats.main import run

    host = host or settings.HOST
    port = port or settings.port

    console.print(Panel.fit(
        f"[bold green]{settings.app_name}[/bold green]\n"
        f"Starting API server on {host}:{port}",
        title="Server"
    ))

    run(host=host, port=port, reload=reload)


# ============== Database Commands ==============

@cli.group()
def db():
    """Database management commands"""
    pass


@db.command()
def init():
    """Create the collection tables"""
    console.print("[yellow]Initializing database tables...[/yellow]")

    async def run():
        from hoopstats.core.database import get_database_manager

        db_manager = get_database_manager()
        try:
            await db_manager.create_all()
        finally:
            await db_manager.close()
        console.print("[green]✓[/green] Database tables created successfully")

    asyncio.run(run())


@db.command()
def migrate():
    """Run database migrations"""
    console.print("[yellow]Running database migrations...[/yellow]")

    result = subprocess.run(["alembic", "upgrade", "head"], capture_output=True, text=True)
    if result.returncode == 0:
        console.print("[green]✓[/green] Migrations applied successfully")
        if result.stdout:
            console.print(result.stdout)
    else:
        console.print("[red]✗[/red] Migration failed")
        console.print(result.stderr)
        sys.exit(1)


@db.command()
def stats():
    """Show row counts per collection"""

    async def run():
        from hoopstats.core.database import get_database_manager
        from hoopstats.core.exceptions import StoreError
        from hoopstats.core.store import CollectionStore
        from hoopstats.models import Game, Player, Team

        db_manager = get_database_manager()
        store = CollectionStore(db_manager)

        tbl = Table(title="Database Statistics")
        tbl.add_column("Collection", style="cyan")
        tbl.add_column("Row Count", justify="right", style="green")

        try:
            for model in (Player, Team, Game):
                try:
                    tbl.add_row(model.__tablename__, str(await store.count(model)))
                except StoreError:
                    tbl.add_row(model.__tablename__, "[red]Error/Not exists[/red]")
        finally:
            await db_manager.close()

        console.print(tbl)

    asyncio.run(run())


# ============== Populate Commands ==============

def _print_summary(name: str, outcome) -> bool:
    """Print one refresh outcome. Returns False for a failure."""
    from hoopstats.core.exceptions import HoopStatsError

    if isinstance(outcome, HoopStatsError):
        console.print(f"[red]✗[/red] {name}: {outcome.message}")
        console.print(f"    {outcome.detail}")
        return False

    console.print(f"[green]✓[/green] {name}: {outcome.message}")
    if outcome.breakdown:
        tbl = Table()
        tbl.add_column("Division", style="cyan")
        tbl.add_column("Teams", justify="right", style="green")
        for division, count in outcome.breakdown.items():
            tbl.add_row(division, str(count))
        console.print(tbl)
    return True


async def _run_population(target: str) -> dict:
    from hoopstats.core.database import get_database_manager
    from hoopstats.core.exceptions import HoopStatsError
    from hoopstats.core.store import CollectionStore
    from hoopstats.services.collectors import get_nba_collector
    from hoopstats.services.population import PopulationService

    db_manager = get_database_manager()
    collector = get_nba_collector()
    service = PopulationService(CollectionStore(db_manager), collector)

    try:
        await db_manager.create_all()
        if target == "all":
            return await service.populate_all()

        step = getattr(service, f"populate_{target}")
        try:
            return {target: await step()}
        except HoopStatsError as e:
            return {target: e}
    finally:
        await collector.close()
        await db_manager.close()


@cli.command()
@click.argument("target", type=click.Choice(["teams", "players", "games", "all"]))
def populate(target: str):
    """Refresh collections from the upstream provider"""
    console.print(f"[yellow]Populating {target}...[/yellow]")

    results = asyncio.run(_run_population(target))

    ok = True
    for name, outcome in results.items():
        ok = _print_summary(name, outcome) and ok
    if not ok:
        sys.exit(1)


# ============== Upstream Commands ==============

@cli.command()
@click.argument("endpoint")
def probe(endpoint: str):
    """Fetch a raw upstream endpoint and print its payload"""
    from hoopstats.core.exceptions import UpstreamError
    from hoopstats.services.collectors import get_nba_collector

    target = "/" + endpoint.lstrip("/")

    async def run():
        collector = get_nba_collector()
        try:
            return await collector.fetch(target)
        finally:
            await collector.close()

    try:
        payload = asyncio.run(run())
    except UpstreamError as e:
        console.print(f"[red]✗[/red] {target}: {e.message}")
        console.print(f"    {e.detail}")
        sys.exit(1)

    console.print_json(json.dumps(payload, default=str))


# ============== Smoke Check ==============

def smoke_check(client: httpx.Client) -> List[Tuple[str, int, bool, str]]:
    """
    Call every read route, plus one unknown route, on a running server.

    Returns (path, status, passed, note) per route. A route passes when it
    answers its expected status; list envelopes also report their count.
    """
    results = []
    for path, expected in SMOKE_CHECKS:
        try:
            response = client.get(path)
        except httpx.HTTPError as e:
            results.append((path, 0, False, str(e) or type(e).__name__))
            continue

        note = ""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if "count" in body:
                note = f"{body['count']} records"
            elif body.get("success") is False:
                note = body.get("message", "")

        results.append((path, response.status_code, response.status_code == expected, note))
    return results


@cli.command()
@click.option("--base-url", "-u", default=None, help="Server base URL")
def smoke(base_url: Optional[str]):
    """Check every read route of a running server"""
    from hoopstats.core.config import settings

    base_url = base_url or f"http://localhost:{settings.port}"
    console.print(f"[yellow]Smoke testing {base_url}...[/yellow]")

    with httpx.Client(base_url=base_url, timeout=settings.RAPIDAPI_TIMEOUT) as client:
        results = smoke_check(client)

    tbl = Table(title="Smoke Check")
    tbl.add_column("Route", style="cyan")
    tbl.add_column("Status", justify="right")
    tbl.add_column("Result")
    tbl.add_column("Note")

    for path, status_code, passed, note in results:
        result = "[green]✓ PASS[/green]" if passed else "[red]✗ FAIL[/red]"
        tbl.add_row(path, str(status_code or "-"), result, note)

    console.print(tbl)

    failed = sum(1 for _, _, passed, _ in results if not passed)
    if failed:
        console.print(f"\n[red]{failed} of {len(results)} routes failed[/red]")
        sys.exit(1)
    console.print(f"\n[green]All {len(results)} routes passed[/green]")


if __name__ == "__main__":
    cli()
