# storefront/api/routers/orders.py
from typing import List

import redis
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_repo, get_lock_service
from storefront.data.database import get_db
from storefront.domain.schemas import OrderCreate, OrderOut, ShippingAddressIn
from storefront.repos.cart_repo import CartRepo
from storefront.services.lock_service import LockService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    db: Session = Depends(get_db),
    carts: CartRepo = Depends(get_cart_repo),
    lock_service: LockService = Depends(get_lock_service),
):
    return OrderService(db, carts=carts, lock_service=lock_service)


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    svc: OrderService = Depends(get_service),
):
    """
    Sklada zamowienie z koszyka sesji i zdejmuje zamowione pozycje z koszyka.
    Wysyła powiadomienie asynchronicznie.
    """
    try:
        return svc.checkout(payload.session_id, payload.user_id, payload.shipping_address)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except redis.RedisError as e:
        #bez locka nie skladamy zamowienia, koszyk zostaje
        raise HTTPException(status_code=503, detail=f"Blokada zamowien niedostepna: {e}")


@router.get("/", response_model=List[OrderOut])
def list_orders(
    user_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    """
    Historia zamówień użytkownika.
    """
    return svc.list_orders(user_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    """
    Pobiera szczegóły zamówienia.
    """
    try:
        return svc.get_order(order_id, user_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}", response_model=OrderOut)
def update_shipping_address(
    order_id: int,
    payload: ShippingAddressIn,
    user_id: int = Query(...),
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.update_shipping_address(order_id, user_id, payload.shipping_address)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
