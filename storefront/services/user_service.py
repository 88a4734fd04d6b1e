from sqlalchemy.orm import Session
from storefront.data.models.user import UserModel
from storefront.repos.user_repo import UserRepo
from storefront.domain.schemas import UserCreate, UserRead, UserUpdate
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        existing = self.repo.get_user(payload.id)
        if existing:
            return UserRead.model_validate(existing)

        user = UserModel(**payload.model_dump())
        created = self.repo.create_user(user)
        logger.info(f"Utworzono uzytkownika {created.id}")
        return UserRead.model_validate(created)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise ValueError("User not found")
        return UserRead.model_validate(user)

    def update_user(self, user_id: int, payload: UserUpdate) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise ValueError("User not found")

        fields = payload.model_dump(exclude_unset=True)
        if "name" in fields and fields["name"] is None:
            raise ValueError("Name cannot be empty")

        updated = self.repo.update_user(user, fields)
        return UserRead.model_validate(updated)

    def delete_user(self, user_id: int) -> None:
        user = self.repo.get_user(user_id)
        if not user:
            raise ValueError("User not found")
        self.repo.delete_user(user)
        logger.info(f"Usunieto uzytkownika {user_id}")
