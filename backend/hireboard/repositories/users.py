"""
User persistence.

UserRepository is what the service layer depends on; the SQLAlchemy
implementation maps the users table to the pydantic user variants.
"""

from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hireboard.core.exceptions import UniquenessConflict, UserNotFoundError
from hireboard.models import UserRecord
from hireboard.schemas.user import USER_MODELS, User, UserBase, parse_user


class UserRepository(Protocol):
    def create(self, user: UserBase) -> None: ...

    def get(self, user_id: UUID) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_by_role(self, role: str, limit: int = 50) -> list[User]: ...

    def update(self, user: UserBase) -> None: ...

    def delete(self, user_id: UUID) -> bool: ...


# ============== Row mapping ==============


def _column(field: str) -> str:
    return "hashed_password" if field == "password" else field


def to_user(row: UserRecord) -> User:
    """Rebuild the user variant from a row, reading only that role's columns."""
    model = USER_MODELS[row.role]
    data = {field: getattr(row, _column(field)) for field in model.model_fields}
    # Unset optional columns fall back to the model defaults
    data = {field: value for field, value in data.items() if value is not None}
    return parse_user(data)


def _write(row: UserRecord, user: UserBase) -> None:
    for field in USER_MODELS[user.role].model_fields:
        setattr(row, _column(field), getattr(user, field))


class SqlAlchemyUserRepository:
    """UserRepository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, user_id: UUID) -> Optional[UserRecord]:
        return self.db.query(UserRecord).filter(UserRecord.id == user_id).first()

    def create(self, user: UserBase) -> None:
        row = UserRecord()
        _write(row, user)
        self.db.add(row)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            field, value = ("email", user.email) if self.find_by_email(user.email) else ("id", str(user.id))
            raise UniquenessConflict(field, value) from None

    def get(self, user_id: UUID) -> Optional[User]:
        row = self._row(user_id)
        return to_user(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        row = self.db.query(UserRecord).filter(UserRecord.email == email.lower()).first()
        return to_user(row) if row else None

    def find_by_role(self, role: str, limit: int = 50) -> list[User]:
        rows = (
            self.db.query(UserRecord)
            .filter(UserRecord.role == role)
            .order_by(UserRecord.created_at.desc())
            .limit(limit)
            .all()
        )
        return [to_user(row) for row in rows]

    def update(self, user: UserBase) -> None:
        row = self._row(user.id)
        if row is None:
            raise UserNotFoundError(f"User {user.id} does not exist")
        _write(row, user)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise UniquenessConflict("email", user.email) from None

    def delete(self, user_id: UUID) -> bool:
        row = self._row(user_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True
