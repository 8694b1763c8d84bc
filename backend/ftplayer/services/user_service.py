from typing import Optional
from sqlalchemy.orm import Session
from ..models.user import User


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        user = User(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
