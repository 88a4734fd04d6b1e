# storefront/repos/product_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> List[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.name)
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: str) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: ProductModel, fields: dict) -> ProductModel:
        for key, value in fields.items():
            setattr(product, key, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
