# storefront/domain/cart.py
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP
from threading import RLock
from typing import List, Tuple, Union

ItemId = Union[int, str]

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Float z katalogu -> Decimal bez smieci binarnych (9.99 zostaje 9.99)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class ProductRef:
    """Referencja produktu przekazywana do koszyka przez katalog / sklep."""

    id: ItemId
    title: str
    price: Decimal
    image: str | None = None


@dataclass
class CartItem:
    id: ItemId
    title: str
    price: Decimal
    quantity: int
    image: str | None = None

    @property
    def subtotal(self) -> Decimal:
        return (self.price * self.quantity).quantize(CENT, rounding=ROUND_HALF_UP)


class Cart:
    """
    Koszyk jednej sesji, w pamieci.

    - max jeden wpis na id (kolejne dodania sumuja quantity)
    - kolejnosc = kolejnosc pierwszego dodania
    - quantity >= 1, wpis z zerem jest usuwany
    - cena i tytul ustalone przy pierwszym dodaniu

    Kazda operacja jest totalna: albo sie wykonuje, albo jest no-op.
    Walidacja wejscia (quantity > 0, price >= 0) nalezy do wywolujacego.
    """

    def __init__(self, remove_on_zero: bool = True):
        #remove_on_zero=False -> decrement zatrzymuje sie na 1
        self.remove_on_zero = remove_on_zero
        self._items: List[CartItem] = []
        self._lock = RLock()

    def _find(self, item_id: ItemId) -> CartItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    #commands
    def add_item(self, product: ProductRef, quantity: int = 1) -> None:
        with self._lock:
            existing = self._find(product.id)
            if existing:
                existing.quantity += quantity
                return
            self._items.append(
                CartItem(
                    id=product.id,
                    title=product.title,
                    price=to_money(product.price),
                    quantity=quantity,
                    image=product.image,
                )
            )

    def remove_item(self, item_id: ItemId) -> None:
        with self._lock:
            self._items = [i for i in self._items if i.id != item_id]

    def increment_quantity(self, item_id: ItemId) -> None:
        with self._lock:
            existing = self._find(item_id)
            if existing:
                existing.quantity += 1

    def decrement_quantity(self, item_id: ItemId) -> None:
        with self._lock:
            existing = self._find(item_id)
            if not existing:
                return
            if existing.quantity > 1:
                existing.quantity -= 1
            elif self.remove_on_zero:
                self.remove_item(item_id)

    def set_quantity(self, item_id: ItemId, quantity: int) -> None:
        with self._lock:
            existing = self._find(item_id)
            if not existing:
                return
            if quantity <= 0:
                self.remove_item(item_id)
            else:
                existing.quantity = quantity

    def clear(self) -> None:
        with self._lock:
            self._items = []

    def deduct(self, ordered: List[CartItem]) -> None:
        """
        Zdejmuje z koszyka dokladnie to, co poszlo do zamowienia.
        Bez zmian w miedzyczasie dziala jak clear(); pozycje dodane
        po snapshocie zostaja w koszyku.
        """
        with self._lock:
            for o in ordered:
                existing = self._find(o.id)
                if not existing:
                    continue
                if existing.quantity > o.quantity:
                    existing.quantity -= o.quantity
                else:
                    self.remove_item(o.id)

    #queries
    def items(self) -> List[CartItem]:
        # kopie, zeby nikt z zewnatrz nie zmienil stanu koszyka
        with self._lock:
            return [replace(i) for i in self._items]

    def get(self, item_id: ItemId) -> CartItem | None:
        with self._lock:
            existing = self._find(item_id)
            return replace(existing) if existing else None

    def contains(self, item_id: ItemId) -> bool:
        with self._lock:
            return self._find(item_id) is not None

    def item_count(self) -> int:
        with self._lock:
            return len(self._items)

    def total_item_count(self) -> int:
        with self._lock:
            return sum(i.quantity for i in self._items)

    def total_price(self) -> Decimal:
        with self._lock:
            total = sum((i.price * i.quantity for i in self._items), Decimal("0.00"))
        return total.quantize(CENT, rounding=ROUND_HALF_UP)

    def snapshot(self) -> Tuple[List[CartItem], Decimal]:
        """Pozycje i suma z jednego momentu (checkout, widok koszyka)."""
        with self._lock:
            return self.items(), self.total_price()

    def __contains__(self, item_id: ItemId) -> bool:
        return self.contains(item_id)

    def __len__(self) -> int:
        return self.item_count()

    def __repr__(self) -> str:
        return f"Cart(items={self.item_count()}, units={self.total_item_count()}, total={self.total_price()})"
