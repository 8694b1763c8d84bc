from datetime import timedelta
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from ..core.security import verify_password, get_password_hash, create_access_token
from ..core.config import settings
from ..core.exceptions import AuthenticationError, ConflictError
from ..models.user import User
from ..schemas.auth import SignupRequest, LoginRequest, TokenResponse
from ..schemas.user import UserResponse
from .user_service import UserService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)

    def signup(self, signup_data: SignupRequest) -> User:
        if self.user_service.get_user_by_email(signup_data.email):
            raise ConflictError("Email already exists")

        try:
            user = self.user_service.create_user(
                name=signup_data.name,
                email=signup_data.email,
                password_hash=get_password_hash(signup_data.password)
            )
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email
            self.db.rollback()
            raise ConflictError("Email already exists")

        logger.info(f"Created user {user.id}")
        return user

    def authenticate(self, login_data: LoginRequest) -> User:
        user = self.user_service.get_user_by_email(login_data.email)

        if not user or not verify_password(login_data.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        return user

    def create_token_response(self, user: User, message: str) -> TokenResponse:
        expires = timedelta(days=settings.access_token_expire_days)
        token = create_access_token(data={"sub": str(user.id)}, expires_delta=expires)

        return TokenResponse(
            message=message,
            token=token,
            expires_in=int(expires.total_seconds()),
            user=UserResponse.model_validate(user)
        )
