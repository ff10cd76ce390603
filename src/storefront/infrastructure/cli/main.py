import click
import uvicorn

from storefront.infrastructure.api.app import create_app
from storefront.infrastructure.bootstrap import build_container
from storefront.infrastructure.cli.branch_commands import branch_assign_staff
from storefront.infrastructure.cli.order_commands import order_place, order_show, order_status
from storefront.infrastructure.cli.product_commands import (
    product_list,
    product_show,
    product_stock,
)
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront: catalog, stock and orders"""
    configure_logging(Settings.from_env().log_level)


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to $HOST).")
@click.option("--port", default=None, type=int, help="Port to bind (defaults to $PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP API."""
    settings = Settings.from_env()
    app = create_app(build_container(settings))
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def branch() -> None:
    """Manage branches."""


# Register subcommands
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_stock)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
branch.add_command(branch_assign_staff)
