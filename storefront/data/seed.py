# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import UserModel, ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {
        "name": "Sourdough Loaf",
        "category": "bakery",
        "price": Decimal("6.50"),
        "description": "Naturally leavened, baked daily",
        "image_url": "https://example.com/img/sourdough.jpg",
    },
    {
        "name": "Ceramic Mug",
        "category": "home",
        "price": Decimal("12.00"),
        "description": "350 ml, dishwasher safe",
        "image_url": "https://example.com/img/mug.jpg",
    },
]


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        # nie nadpisujemy: seed tylko gdy pusto
        if db.query(ProductModel).first():
            return
        if not db.get(UserModel, 1):
            db.add(UserModel(id=1, name="Admin", email="admin@example.com", is_admin=True))
        for data in PRODUCTS:
            db.add(ProductModel(**data))
        db.commit()
        logger.info(f"Seed: dodano {len(PRODUCTS)} produktow")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
