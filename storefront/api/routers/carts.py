#storefront/api/routers/carts.py
import requests
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_repo, get_product_client
from storefront.data.database import get_db
from storefront.domain.schemas import (
    ItemIn,
    QuantityIn,
    CartOut,
)
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService
from storefront.services.product_client import ProductClient, CatalogError

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(
    db: Session = Depends(get_db),
    carts: CartRepo = Depends(get_cart_repo),
    product_client: ProductClient = Depends(get_product_client),
):
    return CartService(
        db=db,
        carts=carts,
        product_client=product_client,
    )


@router.get("/{session_id}", response_model=CartOut)
def get_cart(session_id: str, svc: CartService = Depends(get_service)):
    return svc.get_cart(session_id)


@router.delete("/{session_id}", response_model=CartOut)
def clear_cart(session_id: str, svc: CartService = Depends(get_service)):
    return svc.clear_cart(session_id)


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(
    session_id: str,
    payload: ItemIn,
    svc: CartService = Depends(get_service),
):
    try:
        return svc.add_product(
            session_id=session_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except (CatalogError, requests.RequestException) as e:
        raise HTTPException(status_code=502, detail=f"Katalog niedostepny: {e}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{session_id}/items/{item_id}", response_model=CartOut)
def remove_item(session_id: str, item_id: str, svc: CartService = Depends(get_service)):
    return svc.remove_product(session_id, item_id)


@router.put("/{session_id}/items/{item_id}", response_model=CartOut)
def set_quantity(
    session_id: str,
    item_id: str,
    payload: QuantityIn,
    svc: CartService = Depends(get_service),
):
    return svc.set_quantity(session_id, item_id, payload.quantity)


@router.post("/{session_id}/items/{item_id}/increment", response_model=CartOut)
def increment_item(session_id: str, item_id: str, svc: CartService = Depends(get_service)):
    return svc.increment(session_id, item_id)


@router.post("/{session_id}/items/{item_id}/decrement", response_model=CartOut)
def decrement_item(session_id: str, item_id: str, svc: CartService = Depends(get_service)):
    return svc.decrement(session_id, item_id)
