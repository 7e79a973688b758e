"""
User repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from hostel_app.models.user import User
from hostel_app.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """Data access for user accounts."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.find_one(User.email == email.lower())
