# storefront/services/product_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.schemas import ProductCreate, ProductUpdate, ProductOut
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """
    Produkty sklepu - odczyt dla wszystkich, zmiany tylko dla admina.
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.users = UserRepo(db)

    def list_products(self) -> List[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.list_products()]

    def get_product(self, product_id: str) -> ProductOut:
        product = self.repo.get_product(product_id)
        if not product:
            raise ValueError("Produkt nie istnieje")
        return ProductOut.model_validate(product)

    def create_product(self, user_id: int, payload: ProductCreate) -> ProductOut:
        self._require_admin(user_id)

        created = self.repo.create_product(ProductModel(**payload.model_dump()))
        logger.info(f"Admin {user_id} dodal produkt {created.id} ({created.name})")
        return ProductOut.model_validate(created)

    def update_product(self, user_id: int, product_id: str, payload: ProductUpdate) -> ProductOut:
        self._require_admin(user_id)

        product = self.repo.get_product(product_id)
        if not product:
            raise ValueError("Produkt nie istnieje")

        fields = payload.model_dump(exclude_unset=True)
        #name/price/description nie moga zostac wyzerowane przez null
        for required in ("name", "price", "description", "image_url"):
            if required in fields and fields[required] is None:
                raise ValueError(f"Pole {required} nie moze byc puste")

        updated = self.repo.update_product(product, fields)
        logger.info(f"Admin {user_id} zaktualizowal produkt {product_id}: {sorted(fields)}")
        return ProductOut.model_validate(updated)

    def delete_product(self, user_id: int, product_id: str) -> None:
        self._require_admin(user_id)

        product = self.repo.get_product(product_id)
        if not product:
            raise ValueError("Produkt nie istnieje")

        self.repo.delete_product(product)
        logger.info(f"Admin {user_id} usunal produkt {product_id}")

    def _require_admin(self, user_id: int) -> None:
        user = self.users.get_user(user_id)
        if not user or not user.is_admin:
            raise PermissionError("Brak uprawnien administratora")
