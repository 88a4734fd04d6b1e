# storefront/api/routers/catalog.py
from typing import List

import requests
from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.api.deps import get_product_client
from storefront.domain.schemas import CatalogProduct
from storefront.services.product_client import ProductClient, CatalogError

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/categories", response_model=List[str])
def list_categories(client: ProductClient = Depends(get_product_client)):
    try:
        return client.fetch_categories()
    except (CatalogError, requests.RequestException) as e:
        raise HTTPException(status_code=502, detail=f"Katalog niedostepny: {e}")


@router.get("/products", response_model=List[CatalogProduct])
def list_products(
    category: str | None = Query(default=None),
    client: ProductClient = Depends(get_product_client),
):
    try:
        return client.fetch_products(category)
    except (CatalogError, requests.RequestException) as e:
        raise HTTPException(status_code=502, detail=f"Katalog niedostepny: {e}")


@router.get("/products/{product_id}", response_model=CatalogProduct)
def get_product(product_id: int, client: ProductClient = Depends(get_product_client)):
    try:
        return client.fetch_product(product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (CatalogError, requests.RequestException) as e:
        raise HTTPException(status_code=502, detail=f"Katalog niedostepny: {e}")
