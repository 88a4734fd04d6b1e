# storefront/api/deps.py
from fastapi import Request

from storefront.repos.cart_repo import CartRepo
from storefront.services.lock_service import LockService
from storefront.services.product_client import ProductClient


def get_cart_repo(request: Request) -> CartRepo:
    #jeden rejestr koszykow na aplikacje, tworzony w create_app
    return request.app.state.cart_repo


def get_product_client(request: Request) -> ProductClient:
    return request.app.state.product_client


def get_lock_service(request: Request) -> LockService:
    #jeden klient redisa (pula polaczen) na aplikacje
    return request.app.state.lock_service
