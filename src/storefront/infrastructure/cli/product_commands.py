"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.adjust_stock import AdjustStockHandler
from storefront.application.query_products import QueryProductsHandler, build_filters
from storefront.application.show_product import ShowProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import build_container


@click.command("list")
@click.option("--search", default=None, help="Free-text search.")
@click.option("--category", "categories", multiple=True, help="Category (repeatable).")
@click.option("--brand", "brands", multiple=True, help="Brand (repeatable).")
@click.option("--min-price", default=None, help="Lowest base price.")
@click.option("--max-price", default=None, help="Highest base price.")
@click.option("--in-stock", is_flag=True, default=False, help="Only products in stock.")
@click.option("--on-sale", is_flag=True, default=False, help="Only discounted products.")
@click.option("--sort", default="newest", help="price_asc, price_desc, newest, bestselling, rating or relevance.")
@click.option("--page", default="1", help="Page number.")
@click.option("--limit", default="10", help="Products per page.")
def product_list(
    search: str | None,
    categories: tuple[str, ...],
    brands: tuple[str, ...],
    min_price: str | None,
    max_price: str | None,
    in_stock: bool,
    on_sale: bool,
    sort: str,
    page: str,
    limit: str,
) -> None:
    """List catalog products."""
    try:
        filters = build_filters(
            search=search,
            categories=list(categories),
            brands=list(brands),
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            on_sale=on_sale,
            sort=sort,
            page=page,
            page_size=limit,
        )
        result = QueryProductsHandler(build_container().products).handle(filters)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<24} {'Price':>10} {'Now':>10} {'Stock':>6}")
    click.echo("-" * 80)
    for p in result.products:
        click.echo(
            f"{p.id:<26} {p.name[:24]:<24} {p.base_price:>10.2f} {p.current_price:>10.2f} {p.stock:>6}"
        )
    click.echo(
        f"Page {result.current_page}/{result.num_of_pages} "
        f"({result.total_products} products)"
    )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show a product with its variants and sizes."""
    try:
        p = ShowProductHandler(build_container().products).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{p.name}  ({p.id})")
    click.echo(f"Price: {p.base_price:.2f}  Now: {p.current_price:.2f}")
    click.echo(f"Stock: {p.stock}  Sold: {p.sold}")
    for variant in p.variants:
        click.echo(f"  {variant.color} [{variant.id}]")
        for size in variant.sizes:
            click.echo(f"    {size.name:<8} {size.stock:>5}  [{size.id}]")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--color", "color_id", required=True, help="Variant ID.")
@click.option("--size", "size_id", required=True, help="Size ID.")
@click.option("--quantity", required=True, type=int, help="Units to deduct.")
def product_stock(product_id: str, color_id: str, size_id: str, quantity: int) -> None:
    """Deduct stock from one size of one variant."""
    handler = AdjustStockHandler(build_container().products)

    try:
        product = handler.handle(product_id, color_id, size_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock updated: {product.name} now has {product.stock} in stock.")
