import click

from shop.infrastructure.cli.cart_commands import cart_add, cart_show
from shop.infrastructure.cli.checkout_commands import checkout, orders_list
from shop.infrastructure.config import Settings
from shop.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Shop: carts, checkout and orders."""
    settings = Settings()
    configure_logging(settings.log_level, settings.log_file)
    ctx.obj = settings


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_show)
cli.add_command(checkout)
cli.add_command(orders_list)
