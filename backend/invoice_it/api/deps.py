"""
Shared request dependencies
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
import logging

from invoice_it.core.config import settings
from invoice_it.core.database import get_db
from invoice_it.core.security import TokenError, decode_access_token
from invoice_it.models.user import User

logger = logging.getLogger(__name__)

def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """
    Resolve the user from the session cookie

    401 when no cookie is present, 403 when the token is invalid, expired,
    or names a user that no longer exists.
    """
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )

    try:
        identity = decode_access_token(token)
    except TokenError as e:
        logger.info(f"Rejected session token: {e}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token"
        )

    user = db.query(User).filter(User.id == identity["id"]).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token"
        )

    return user
