# storefront/main.py
from fastapi import FastAPI
from storefront.data.database import Base, engine
from storefront.api.routers import health, catalog, products, carts, orders, users
from storefront.repos.cart_repo import CartRepo
from storefront.services.lock_service import LockService
from storefront.services.product_client import ProductClient
from storefront.utils.settings import CART_TTL_SECONDS, CART_REMOVE_ON_ZERO
from storefront.utils.logging import get_logger
import uvicorn

logger = get_logger(__name__)

# IMPORT WSZYSTKICH MODELI PRZED CREATE_ALL
from storefront.data.models import UserModel, ProductModel, OrderModel, OrderItemModel  # noqa: F401


def init_db() -> None:
    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise


def create_app(
    cart_repo: CartRepo | None = None,
    product_client: ProductClient | None = None,
    lock_service: LockService | None = None,
) -> FastAPI:
    init_db()

    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
    )

    #stan koszykow nalezy do tej instancji aplikacji, nie do modulu
    #pusty CartRepo jest falsy (len 0)
    if cart_repo is None:
        cart_repo = CartRepo(ttl_seconds=CART_TTL_SECONDS, remove_on_zero=CART_REMOVE_ON_ZERO)
    app.state.cart_repo = cart_repo
    app.state.product_client = product_client if product_client is not None else ProductClient()
    app.state.lock_service = lock_service if lock_service is not None else LockService()

    # Include routers
    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(users.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
