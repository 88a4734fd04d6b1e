#storefront/data/models/product.py
import uuid

from sqlalchemy import Column, String, Text, Numeric

from storefront.data.database import Base


class ProductModel(Base):
    """Produkty zarzadzane z panelu admina (id tekstowe, jak dokumenty)."""

    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(String, nullable=False)
