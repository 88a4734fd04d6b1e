# storefront/services/product_client.py
from typing import List

import requests
from pydantic import TypeAdapter, ValidationError

from storefront.domain.schemas import CatalogProduct
from storefront.utils.retry import http_retry
from storefront.utils.settings import CATALOG_URL, CATALOG_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_products_adapter = TypeAdapter(List[CatalogProduct])
_categories_adapter = TypeAdapter(List[str])


class CatalogError(Exception):
    """Katalog odpowiedzial czyms, co nie pasuje do oczekiwanego ksztaltu."""


class ProductClient:
    """Klient publicznego katalogu produktow (REST, format Fake Store API)."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None, session: requests.Session | None = None):
        self.base_url = (base_url or CATALOG_URL).rstrip("/")
        self.timeout = timeout or CATALOG_TIMEOUT_SECONDS
        self.session = session or requests.Session()

    @http_retry()
    def _get(self, path: str):
        url = f"{self.base_url}{path}"
        logger.info(f"ProductClient GET {url}")

        resp = self.session.get(url, timeout=self.timeout)
        resp.raise_for_status()
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise CatalogError(f"Catalog returned non-JSON body for {url}") from e

    def fetch_categories(self) -> List[str]:
        data = self._get("/products/categories")
        try:
            return _categories_adapter.validate_python(data)
        except ValidationError as e:
            raise CatalogError(f"Unexpected categories payload: {e.error_count()} errors") from e

    def fetch_products(self, category: str | None = None) -> List[CatalogProduct]:
        path = f"/products/category/{category}" if category else "/products"
        data = self._get(path)
        try:
            return _products_adapter.validate_python(data)
        except ValidationError as e:
            raise CatalogError(f"Unexpected products payload: {e.error_count()} errors") from e

    def fetch_product(self, product_id: int) -> CatalogProduct:
        try:
            data = self._get(f"/products/{product_id}")
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise ValueError(f"Produkt {product_id} nie istnieje w katalogu") from e
            raise
        #fakestoreapi zwraca 200 i puste body dla nieistniejacego id
        if data is None or data == "":
            raise ValueError(f"Produkt {product_id} nie istnieje w katalogu")
        try:
            return CatalogProduct.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Unexpected product payload for {product_id}: {e.error_count()} errors") from e
