"""Catalog routes: listing, search, browsing, product CRUD and stock."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from storefront.application.add_product import AddProductHandler
from storefront.application.adjust_stock import AdjustStockHandler
from storefront.application.browse_catalog import (
    CatalogValuesHandler,
    DiscountedProductsHandler,
    RelatedProductsHandler,
)
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.query_products import QueryProductsHandler, build_filters
from storefront.application.search_products import SearchProductsHandler, build_search_filters
from storefront.application.show_product import ShowProductHandler, VariantStockHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.infrastructure.api.deps import get_container
from storefront.infrastructure.api.schemas import (
    ProductIn,
    ProductOut,
    ProductUpdateIn,
    StockUpdateIn,
    dump,
)
from storefront.infrastructure.bootstrap import Container

router = APIRouter(prefix="/product", tags=["product"])


@router.get("")
def list_products(
    search: Optional[str] = None,
    category: Optional[List[str]] = Query(None),
    brand: Optional[List[str]] = Query(None),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    in_stock: bool = Query(False, alias="inStock"),
    on_sale: bool = Query(False, alias="onSale"),
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    container: Container = Depends(get_container),
):
    filters = build_filters(
        search=search,
        categories=category,
        brands=brand,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        on_sale=on_sale,
        sort=sort,
        page=page,
        page_size=limit,
    )
    result = QueryProductsHandler(container.products).handle(filters)
    return {
        "products": [dump(ProductOut, p) for p in result.products],
        "totalProducts": result.total_products,
        "numOfPages": result.num_of_pages,
        "currentPage": result.current_page,
        "filters": {
            "brands": result.brands,
            "categories": result.categories,
            "priceRange": {"minPrice": result.min_price, "maxPrice": result.max_price},
        },
    }


@router.get("/discounted")
def discounted_products(
    limit: int = Query(10, ge=1),
    container: Container = Depends(get_container),
):
    products = DiscountedProductsHandler(container.products).handle(limit=limit)
    return {"products": [dump(ProductOut, p) for p in products]}


@router.get("/categories")
def product_categories(container: Container = Depends(get_container)):
    return {"categories": CatalogValuesHandler(container.products).categories()}


@router.get("/brands")
def product_brands(container: Container = Depends(get_container)):
    return {"brands": CatalogValuesHandler(container.products).brands()}


@router.get("/search")
def search_products(
    query: Optional[str] = None,
    categories: Optional[List[str]] = Query(None),
    price_min: Optional[str] = Query(None, alias="priceMin"),
    price_max: Optional[str] = Query(None, alias="priceMax"),
    sort: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    container: Container = Depends(get_container),
):
    filters = build_search_filters(
        query,
        categories=categories,
        price_min=price_min,
        price_max=price_max,
        sort=sort,
        page=page,
        limit=limit,
    )
    result = SearchProductsHandler(container.products).handle(filters)
    return {
        "products": [dump(ProductOut, p) for p in result.products],
        "totalProducts": result.total_products,
        "numOfPages": result.num_of_pages,
        "currentPage": result.current_page,
    }


@router.get("/{product_id}")
def get_product(product_id: str, container: Container = Depends(get_container)):
    product = ShowProductHandler(container.products).handle(product_id)
    return {"product": dump(ProductOut, product)}


@router.get("/{product_id}/related")
def related_products(
    product_id: str,
    limit: int = Query(5, ge=1),
    container: Container = Depends(get_container),
):
    related = RelatedProductsHandler(container.products).handle(product_id, limit=limit)
    return {"relatedProducts": [dump(ProductOut, p) for p in related]}


@router.get("/{product_id}/stock")
def variant_stock(
    product_id: str,
    color_id: str = Query(..., alias="colorId"),
    size_id: str = Query(..., alias="sizeId"),
    container: Container = Depends(get_container),
):
    stock = VariantStockHandler(container.products).handle(product_id, color_id, size_id)
    return {"stock": stock}


@router.post("", status_code=201)
def create_product(body: ProductIn, container: Container = Depends(get_container)):
    product = AddProductHandler(container.products).handle(body.to_spec())
    return {"message": "Product created successfully", "product": dump(ProductOut, product)}


@router.put("/{product_id}")
def update_product(
    product_id: str,
    body: ProductUpdateIn,
    container: Container = Depends(get_container),
):
    product = UpdateProductHandler(container.products).handle(product_id, body.to_changes())
    return {"message": "Product updated successfully", "product": dump(ProductOut, product)}


@router.delete("/{product_id}")
def delete_product(product_id: str, container: Container = Depends(get_container)):
    DeleteProductHandler(container.products).handle(product_id)
    return {"message": "Product successfully removed", "productId": product_id}


@router.patch("/{product_id}/stock")
def update_product_stock(
    product_id: str,
    body: StockUpdateIn,
    container: Container = Depends(get_container),
):
    product = AdjustStockHandler(container.products).handle(
        product_id, body.color_id, body.size_id, body.quantity
    )
    return {"message": "Stock updated successfully", "product": dump(ProductOut, product)}
