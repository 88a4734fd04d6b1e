from typing import Dict, Any
from sqlalchemy.orm import Session

from storefront.domain.cart import Cart, ItemId, ProductRef, to_money
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.product_client import ProductClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def cart_to_dict(session_id: str, cart: Cart | None) -> Dict[str, Any]:
    items, total = cart.snapshot() if cart else ([], to_money("0.00"))
    return {
        "session_id": session_id,
        "items": [
            {
                "id": i.id,
                "title": i.title,
                "price": i.price,
                "quantity": i.quantity,
                "subtotal": i.subtotal,
                "image": i.image,
            }
            for i in items
        ],
        "item_count": len(items),
        "total_items": sum(i.quantity for i in items),
        "total": total,
    }


class CartService:
    """
    Use case'y koszyka sesji.
    commands (add, remove, increment, decrement, set, clear) zmieniaja stan
    query (get) tylko odczyt
    Stan koszyka zmieniamy tylko przez operacje Cart.
    """

    def __init__(
        self,
        db: Session,
        carts: CartRepo,
        product_client: ProductClient,
    ):
        self.carts = carts
        self.products = ProductRepo(db)
        self.product_client = product_client

    #query - odczyt
    def get_cart(self, session_id: str) -> Dict[str, Any]:
        return cart_to_dict(session_id, self.carts.get(session_id))

    #commands
    def add_product(self, session_id: str, product_id: ItemId, quantity: int = 1) -> Dict[str, Any]:
        # Walidacja na granicy, Cart ufa wejsciu
        if quantity <= 0:
            raise ValueError("Ilosc musi byc wieksza niz 0")

        product = self._resolve_product(product_id)
        cart = self.carts.get_or_create(session_id)
        cart.add_item(product, quantity)

        logger.info(f"Produkt {product.id} x{quantity} dodany do koszyka sesji {session_id}")
        return cart_to_dict(session_id, cart)

    def remove_product(self, session_id: str, item_id: str) -> Dict[str, Any]:
        cart = self.carts.get(session_id)
        if cart:
            cart.remove_item(self._resolve_key(cart, item_id))
        return cart_to_dict(session_id, cart)

    def increment(self, session_id: str, item_id: str) -> Dict[str, Any]:
        cart = self.carts.get(session_id)
        if cart:
            cart.increment_quantity(self._resolve_key(cart, item_id))
        return cart_to_dict(session_id, cart)

    def decrement(self, session_id: str, item_id: str) -> Dict[str, Any]:
        cart = self.carts.get(session_id)
        if cart:
            cart.decrement_quantity(self._resolve_key(cart, item_id))
        return cart_to_dict(session_id, cart)

    def set_quantity(self, session_id: str, item_id: str, quantity: int) -> Dict[str, Any]:
        cart = self.carts.get(session_id)
        if cart:
            cart.set_quantity(self._resolve_key(cart, item_id), quantity)
        return cart_to_dict(session_id, cart)

    def clear_cart(self, session_id: str) -> Dict[str, Any]:
        cart = self.carts.get(session_id)
        if cart:
            cart.clear()
            logger.info(f"Koszyk sesji {session_id} wyczyszczony")
        return cart_to_dict(session_id, cart)

    def _resolve_product(self, product_id: ItemId) -> ProductRef:
        # int -> katalog zewnetrzny, str -> produkty sklepu
        if isinstance(product_id, int):
            logger.info(f"Pobieranie danych produktu {product_id} z katalogu")
            pdata = self.product_client.fetch_product(product_id)
            return ProductRef(
                id=pdata.id,
                title=pdata.title,
                price=to_money(pdata.price),
                image=pdata.image or None,
            )

        stored = self.products.get_product(product_id)
        if not stored:
            raise ValueError(f"Produkt {product_id} nie istnieje")
        return ProductRef(
            id=stored.id,
            title=stored.name,
            price=to_money(stored.price),
            image=stored.image_url,
        )

    @staticmethod
    def _resolve_key(cart: Cart, raw: str) -> ItemId:
        #id z url-a zawsze jest stringiem, a klucze katalogu to inty
        for item in cart.items():
            if str(item.id) == str(raw):
                return item.id
        return raw
