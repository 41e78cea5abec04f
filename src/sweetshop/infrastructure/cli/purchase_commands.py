"""CLI commands for purchase history."""

from __future__ import annotations

import click

from sweetshop.application.show_purchases import ShowPurchasesHandler
from sweetshop.domain.exceptions import DomainException
from sweetshop.infrastructure.bootstrap import Container


@click.command("show")
@click.option("--user", "user_id", required=True, help="User whose history to show.")
@click.option("--admin", "is_admin", is_flag=True, default=False, help="Show every user's purchases.")
@click.pass_obj
def purchases_show(obj: dict, user_id: str, is_admin: bool) -> None:
    """Show purchase history."""
    container: Container = obj["container"]
    handler = ShowPurchasesHandler(purchase_repo=container.purchase_repository())

    try:
        purchases = handler.handle(actor_id=user_id, is_admin=is_admin)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not purchases:
        click.echo("No purchases found.")
        return

    click.echo(f"{'When':<17} {'User':<12} {'Sweet':<38} {'Qty':>5} {'Total':>10}")
    click.echo("-" * 86)
    for p in purchases:
        click.echo(
            f"{p.created_at.strftime('%Y-%m-%d %H:%M'):<17} {p.user_id:<12} "
            f"{p.product_id:<38} {p.quantity:>5} {'$' + format(p.total_price, '.2f'):>10}"
        )
