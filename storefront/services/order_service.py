# storefront/services/order_service.py
from typing import Any, Dict, List

import redis
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "status": order.status,
        "total": order.total,
        "shipping_address": order.shipping_address,
        "created_at": order.created_at,
        "items": [
            {
                "product_id": i.product_id,
                "title": i.title,
                "price": i.price,
                "quantity": i.quantity,
            }
            for i in order.items
        ],
    }


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień.
    Koszyk czyta tylko przez jego operacje (snapshot, deduct).
    """

    def __init__(
        self,
        db: Session,
        carts: CartRepo,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.repo = OrderRepo(db)
        self.users = UserRepo(db)
        self.carts = carts
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    def checkout(self, session_id: str, user_id: int, shipping_address: str | None = None) -> Dict[str, Any]:
        """
        Use Case: Zlozenie zamowienia z koszyka sesji.

        1. Uzytkownik musi istniec, koszyk nie moze byc pusty
        2. Lock w redisie - jeden checkout na raz dla sesji
        3. Zamowienie + pozycje w jednej transakcji
        4. Sukces: zdejmujemy zamowione pozycje z koszyka i wysylamy powiadomienie
           Blad: rollback, koszyk bez zmian
        """
        user = self.users.get_user(user_id)
        if not user:
            raise ValueError("Uzytkownik nie istnieje")

        cart = self.carts.get(session_id)
        if not cart or cart.item_count() == 0:
            raise ValueError("Nie mozna zlozyc zamowienia z pustego koszyka")

        owner = f"user-{user_id}"
        locked = self.lock_service.acquire_checkout_lock(
            session_id=session_id,
            owner=owner,
            ttl=CHECKOUT_LOCK_TTL_SECONDS,
        )
        if not locked:
            raise RuntimeError("Zamowienie dla tego koszyka jest juz przetwarzane")

        try:
            items, total = cart.snapshot()
            if not items:
                raise ValueError("Nie mozna zlozyc zamowienia z pustego koszyka")

            logger.info(f"Checkout sesji {session_id}: {len(items)} pozycji, total {total}")

            order = OrderModel(
                user_id=user_id,
                status="PROCESSING",
                total=total,
                shipping_address=shipping_address or user.address,
                items=[
                    OrderItemModel(
                        product_id=str(i.id),
                        title=i.title,
                        price=i.price,
                        quantity=i.quantity,
                    )
                    for i in items
                ],
            )
            self.repo.add_order(order)
            self.repo.commit()
            self.repo.refresh(order)
        except Exception as e:
            logger.error(f"Blad podczas skladania zamowienia dla sesji {session_id}: {e}")
            self.repo.rollback()
            self._release_lock(session_id, owner)
            raise

        #tylko zamowione ilosci - rownolegle dodane pozycje zostaja w koszyku
        cart.deduct(items)
        self._release_lock(session_id, owner)

        logger.info(f"Order {order.id} created from session {session_id}")

        try:
            self.notification_service.send_order_notification(user_id, order.id)
        except Exception as e:
            #zamowienie juz zapisane, brak powiadomienia nie cofa checkoutu
            logger.warning(f"Nie udalo sie wyslac powiadomienia o zamowieniu {order.id}: {e}")

        return order_to_dict(order)

    def _release_lock(self, session_id: str, owner: str) -> None:
        try:
            self.lock_service.release_checkout_lock(session_id, owner)
        except redis.RedisError as e:
            #lock i tak wygasnie po CHECKOUT_LOCK_TTL_SECONDS
            logger.warning(f"Nie udalo sie zwolnic locka checkoutu sesji {session_id}: {e}")

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        """
        Use Case: Historia zamowien uzytkownika (najnowsze pierwsze).
        """
        return [order_to_dict(o) for o in self.repo.list_orders_by_user(user_id)]

    def get_order(self, order_id: int, user_id: int) -> Dict[str, Any]:
        return order_to_dict(self._owned_order(order_id, user_id))

    def update_shipping_address(self, order_id: int, user_id: int, address: str) -> Dict[str, Any]:
        order = self._owned_order(order_id, user_id)
        updated = self.repo.update_order(order, {"shipping_address": address})
        logger.info(f"Zmieniono adres dostawy zamowienia {order_id}")
        return order_to_dict(updated)

    def _owned_order(self, order_id: int, user_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise ValueError("Zamówienie nie istnieje")

        if order.user_id != user_id:
            raise PermissionError("Brak dostępu do zamówienia")

        return order
