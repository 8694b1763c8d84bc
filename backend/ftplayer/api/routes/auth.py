from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import get_current_user
from ...schemas.auth import SignupRequest, LoginRequest, TokenResponse
from ...schemas.common import MessageResponse
from ...schemas.user import UserEnvelope, UserResponse
from ...services.auth_service import AuthService
from ...models.user import User

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: SignupRequest,
    db: Session = Depends(get_db)
):
    """Create an account and return an access token"""
    auth_service = AuthService(db)
    user = auth_service.signup(signup_data)
    return auth_service.create_token_response(user, "User created successfully")


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """Verify credentials and return an access token"""
    auth_service = AuthService(db)
    user = auth_service.authenticate(login_data)
    return auth_service.create_token_response(user, "Login successful")


@router.get("/me", response_model=UserEnvelope)
async def get_me(
    current_user: User = Depends(get_current_user)
):
    """Get current user information"""
    return UserEnvelope(
        message="User retrieved successfully",
        user=UserResponse.model_validate(current_user)
    )


@router.get("/health", response_model=MessageResponse)
async def health():
    return MessageResponse(message="Server is running")
