import click
import uvicorn

from sweetshop.infrastructure.api.app import create_app
from sweetshop.infrastructure.bootstrap import build_container
from sweetshop.infrastructure.cli.inventory_commands import (
    inventory_purchase,
    inventory_restock,
    inventory_show,
)
from sweetshop.infrastructure.cli.purchase_commands import purchases_show
from sweetshop.infrastructure.config import Settings
from sweetshop.infrastructure.logging import setup_logging


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Sweet Shop: inventory transactions."""
    ctx.ensure_object(dict)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        raise click.ClickException(f"Error initializing configuration: {exc}")

    setup_logging(debug=debug, level=settings.log_level)
    ctx.obj["container"] = build_container(settings)


@cli.group()
def db() -> None:
    """Manage the database."""


@cli.group()
def inventory() -> None:
    """Show, purchase and restock sweets."""


@cli.group()
def purchases() -> None:
    """Browse purchase history."""


@db.command("init")
@click.option("--seed", is_flag=True, default=False, help="Insert the sample catalog.")
@click.pass_obj
def db_init(obj: dict, seed: bool) -> None:
    """Create tables (and optionally seed sample sweets)."""
    database = obj["container"].database
    database.create_schema()
    click.echo("Schema ready.")
    if seed:
        inserted = database.seed_sample_sweets()
        click.echo(f"Seeded {inserted} sweet(s).")


@cli.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, type=int, show_default=True)
@click.pass_obj
def serve(obj: dict, host: str, port: int) -> None:
    """Run the HTTP API."""
    container = obj["container"]
    container.database.create_schema()
    app = create_app(
        inventory_repo=container.inventory_repository(),
        purchase_repo=container.purchase_repository(),
        authenticator=container.authenticator(),
        max_write_attempts=container.settings.max_write_attempts,
    )
    uvicorn.run(app, host=host, port=port, log_config=None)


# Register subcommands
inventory.add_command(inventory_show)
inventory.add_command(inventory_purchase)
inventory.add_command(inventory_restock)
purchases.add_command(purchases_show)
