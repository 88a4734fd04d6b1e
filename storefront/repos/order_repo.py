# storefront/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #bez commita - checkout sam decyduje o commit/rollback
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_orders_by_user(self, user_id: int) -> List[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def update_order(self, order: OrderModel, fields: dict) -> OrderModel:
        for key, value in fields.items():
            setattr(order, key, value)
        self.db.commit()
        self.db.refresh(order)
        return order

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, order: OrderModel) -> OrderModel:
        self.db.refresh(order)
        return order
