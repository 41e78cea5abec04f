"""CLI commands for stock: listing, purchasing and restocking."""

from __future__ import annotations

import click

from sweetshop.application.purchase_sweet import PurchaseSweetHandler
from sweetshop.application.restock_sweet import RestockSweetHandler
from sweetshop.application.show_inventory import ShowInventoryHandler
from sweetshop.domain.exceptions import DomainException, InsufficientStockError
from sweetshop.infrastructure.bootstrap import Container


@click.command("show")
@click.pass_obj
def inventory_show(obj: dict) -> None:
    """Show current stock levels."""
    container: Container = obj["container"]
    handler = ShowInventoryHandler(inventory_repo=container.inventory_repository())

    try:
        lines = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No sweets found.")
        return

    click.echo(f"{'ID':<38} {'Name':<26} {'Category':<12} {'Price':>8} {'Stock':>7}")
    click.echo("-" * 95)
    for line in lines:
        click.echo(
            f"{line.id:<38} {line.name:<26} {line.category:<12} "
            f"{'$' + format(line.price, '.2f'):>8} {line.quantity:>7}"
        )


@click.command("purchase")
@click.option("--id", "product_id", required=True, help="Sweet ID.")
@click.option("--quantity", required=True, type=int, help="Units to buy.")
@click.option("--user", "user_id", required=True, help="Purchasing user ID.")
@click.pass_obj
def inventory_purchase(obj: dict, product_id: str, quantity: int, user_id: str) -> None:
    """Buy units of a sweet (decrements stock, records the purchase)."""
    container: Container = obj["container"]
    handler = PurchaseSweetHandler(
        inventory_repo=container.inventory_repository(),
        purchase_repo=container.purchase_repository(),
        max_attempts=container.settings.max_write_attempts,
    )

    try:
        result = handler.handle(product_id=product_id, quantity=quantity, actor_id=user_id)
    except InsufficientStockError as exc:
        raise click.ClickException(f"{exc}. Retry with --quantity {exc.available} or less.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Purchase {result.purchase.id} recorded: {result.purchase.quantity} unit(s) "
        f"for ${result.purchase.total_price:.2f}"
    )
    click.echo(f"Remaining stock: {result.remaining_stock}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Sweet ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--admin/--no-admin", "is_admin", default=False, help="Whether the acting user is an administrator.")
@click.pass_obj
def inventory_restock(
    obj: dict, product_id: str, quantity: int, user_id: str, is_admin: bool
) -> None:
    """Add units to a sweet's stock (admin only)."""
    container: Container = obj["container"]
    handler = RestockSweetHandler(
        inventory_repo=container.inventory_repository(),
        max_attempts=container.settings.max_write_attempts,
    )

    try:
        result = handler.handle(
            product_id=product_id, quantity=quantity, actor_id=user_id, is_admin=is_admin
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"'{result.product_name}' restocked, now {result.updated_quantity} in stock.")
