"""
Authentication endpoints: registration, cookie login/logout, token validation
"""

from fastapi import APIRouter, HTTPException, Depends, status, Request, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from invoice_it.api.deps import get_current_user
from invoice_it.core.config import settings
from invoice_it.core.database import get_db
from invoice_it.core.security import (
    TokenError, create_access_token, decode_access_token, hash_password, verify_password
)
from invoice_it.models.user import User
from invoice_it.schemas.user import (
    LoginResponse, TokenValidation, UserCreate, UserLogin, UserResponse
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN,
    )

@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_in: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new business account
    """
    if db.query(User).filter(User.email == user_in.email.lower()).first():
        raise HTTPException(status_code=409, detail="Email is already registered")

    try:
        user = User(
            name=user_in.name,
            email=user_in.email,
            password_hash=hash_password(user_in.password),
            phone=user_in.phone,
            business_name=user_in.business_name,
            address=user_in.address,
            gstin=user_in.gstin,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"Registered account {user.id} ({user.email})")
        return user

    except IntegrityError:
        # Lost a race with a concurrent registration of the same email
        db.rollback()
        raise HTTPException(status_code=409, detail="Email is already registered")
    except Exception as e:
        db.rollback()
        logger.error(f"Registration error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Something went wrong")

@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    """
    Verify credentials and set the session cookie
    """
    user = db.query(User).filter(User.email == credentials.email.lower()).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid email")

    if not verify_password(credentials.password, user.password_hash):
        logger.info(f"Failed login for account {user.id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid password")

    _set_session_cookie(response, create_access_token(user.id, user.email))
    logger.info(f"Account {user.id} logged in")

    return {"message": "Login successful", "user": user}

@router.post("/logout")
async def logout(response: Response):
    """
    Clear the session cookie
    """
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
        domain=settings.COOKIE_DOMAIN,
    )
    return {"message": "Logged out"}

@router.get("/validate-token", response_model=TokenValidation)
async def validate_token(request: Request):
    """
    Report whether the session cookie holds a valid token
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    try:
        identity = decode_access_token(token)
    except TokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    return TokenValidation(valid=True, user_id=identity["id"], email=identity["email"])

@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)):
    """Profile of the logged-in account"""
    return current_user
