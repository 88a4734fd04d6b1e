# storefront/repos/cart_repo.py
import time
from threading import Lock
from typing import Dict, Tuple

from storefront.domain.cart import Cart
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    """
    Rejestr koszykow sesji (session_id -> Cart), tylko w pamieci procesu.
    Jedna instancja na aplikacje, wstrzykiwana do serwisow.
    Koszyk nieuzywany dluzej niz ttl_seconds jest wyrzucany (sesja sie skonczyla).
    """

    def __init__(self, ttl_seconds: int, remove_on_zero: bool = True, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.remove_on_zero = remove_on_zero
        self._clock = clock
        self._carts: Dict[str, Tuple[Cart, float]] = {}
        self._lock = Lock()

    def get(self, session_id: str) -> Cart | None:
        self.purge_expired()
        with self._lock:
            entry = self._carts.get(session_id)
            if not entry:
                return None
            cart, _ = entry
            self._carts[session_id] = (cart, self._clock())
            return cart

    def get_or_create(self, session_id: str) -> Cart:
        self.purge_expired()
        with self._lock:
            entry = self._carts.get(session_id)
            if entry:
                cart = entry[0]
            else:
                cart = Cart(remove_on_zero=self.remove_on_zero)
                logger.info(f"Nowy koszyk dla sesji {session_id}")
            self._carts[session_id] = (cart, self._clock())
            return cart

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._carts.pop(session_id, None)

    def purge_expired(self, now: float | None = None) -> int:
        now = self._clock() if now is None else now
        with self._lock:
            expired = [
                sid for sid, (_, touched) in self._carts.items()
                if now - touched > self.ttl_seconds
            ]
            for sid in expired:
                del self._carts[sid]

        if expired:
            logger.info(f"Wygaszono {len(expired)} koszykow sesji")
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._carts)
