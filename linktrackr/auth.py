"""
Bearer-token authentication.

Accounts live in an external service that issues HS256 JWTs signed with
the shared ``secret_key``. This module only resolves a token to the
account identity (the ``sub`` claim); registration and login are not
handled here.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from linktrackr.config import settings

bearer_scheme = HTTPBearer(auto_error=False)


class Account(BaseModel):
    """Identity attached to an authenticated request"""
    id: str


def create_access_token(account_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed access token for an account.

    Args:
        account_id: The account identity, stored as the ``sub`` claim
        expires_delta: Optional custom lifetime
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {"sub": account_id, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Account]:
    """Return the account for a valid token, None if invalid or expired"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    account_id = payload.get("sub")
    if not account_id:
        return None

    return Account(id=str(account_id))


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Account:
    """Resolve the requesting account or fail with 401"""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    account = decode_access_token(credentials.credentials)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return account
