"""
Catalog endpoints
"""
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from storefront.dependencies import get_catalog_service, require_admin
from storefront.schemas import CategoryCreate, CategoryOut, ProductCreate, ProductOut, SubcategoryCreate, SubcategoryOut
from storefront.services import CatalogService

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.list_categories()


@router.post("/categories", response_model=CategoryOut, dependencies=[Depends(require_admin)])
def create_category(data: CategoryCreate, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.create_category(data)


@router.get("/subcategories", response_model=List[SubcategoryOut])
def list_subcategories(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return catalog.list_subcategories(category_id)


@router.post("/subcategories", response_model=SubcategoryOut, dependencies=[Depends(require_admin)])
def create_subcategory(data: SubcategoryCreate, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.create_subcategory(data)


@router.get("/products", response_model=List[ProductOut])
def list_products(
    search: Optional[str] = None,
    category_id: Optional[int] = Query(None, alias="categoryId"),
    subcategory_id: Optional[int] = Query(None, alias="subcategoryId"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", ge=0),
    featured: Optional[bool] = None,
    is_deal: Optional[bool] = Query(None, alias="isDeal"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return catalog.list_products(
        search=search,
        category_id=category_id,
        subcategory_id=subcategory_id,
        min_price=min_price,
        max_price=max_price,
        featured=featured,
        is_deal=is_deal,
    )


@router.get("/products/featured", response_model=List[ProductOut])
def featured_products(catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.featured_products()


@router.get("/products/deals", response_model=List[ProductOut])
def deal_products(catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.deal_products()


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.get_product(product_id)


@router.post("/products", response_model=ProductOut, dependencies=[Depends(require_admin)])
def create_product(data: ProductCreate, catalog: CatalogService = Depends(get_catalog_service)):
    return catalog.create_product(data)
