
import asyncio
from typing import Optional

import typer
import uvicorn

from regs_insight.config import get_settings
from regs_insight.db.bootstrap import ensure_database, ensure_tables
from regs_insight.db.session import Database
from regs_insight.utils.log import setup_logging

app = typer.Typer(no_args_is_help=True, add_completion=False)


async def _create_db() -> bool:
    settings = get_settings()
    await ensure_database(settings)
    database = Database(
        settings.sqlalchemy_url(),
        pool_size=settings.db_pool_size,
        connect_timeout=settings.db_connect_timeout,
    )
    try:
        await database.ping()
        return await ensure_tables(database)
    except Exception as e:
        typer.secho(f"Failed to create DB/tables. Is the database server running and are credentials correct? {e}",
                    fg=typer.colors.RED, err=True)
        return False
    finally:
        await database.dispose()


@app.command("create-db")
def create_db():
    """Create the database (if permitted) and both tables on the configured server."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if not asyncio.run(_create_db()):
        raise typer.Exit(code=1)
    typer.echo(f"Database and tables ready: {settings.db_name}")


@app.command("serve")
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: Optional[int] = typer.Option(None, help="Defaults to PORT"),
):
    """Run the HTTP API with uvicorn."""
    uvicorn.run(
        "regs_insight.main:create_app",
        factory=True,
        host=host,
        port=port or get_settings().port,
    )


if __name__ == "__main__":
    app()
