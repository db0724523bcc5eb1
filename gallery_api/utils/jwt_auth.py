"""
JWT token-based authorization for admin-only routes.
Tokens carry the admin e-mail as subject and are checked against ADMIN_EMAILS.
The guard is a no-op unless ENFORCE_ADMIN_AUTH is enabled.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import HTTPException, status, Header
from gallery_api.config import settings
from gallery_api.utils.auth import is_admin_email


ALGORITHM = "HS256"


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary of claims to include in token
        expires_delta: Optional custom expiration time

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ADMIN_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expire,
        "iat": datetime.now(timezone.utc),
        "type": "access"
    })

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def create_admin_token(email: str, expires_delta: Optional[timedelta] = None) -> str:
    """Mint an access token for an admin e-mail address."""
    return create_access_token({"sub": email.strip().lower(), "role": "admin"}, expires_delta)


def verify_token(token: str) -> dict:
    """
    Verify and decode a JWT token.

    Args:
        token: JWT token string

    Returns:
        dict: Decoded token payload

    Raises:
        HTTPException: If token is invalid, expired, or malformed
    """
    try:
        # jose rejects expired tokens with ExpiredSignatureError (a JWTError)
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid token", "message": "Authentication token is invalid or expired"}
        )

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Invalid token type", "message": "Token is not an access token"}
        )

    return payload


def require_admin(
    authorization: Optional[str] = Header(None, description="Bearer token for admin routes")
) -> Optional[dict]:
    """
    FastAPI dependency guarding mutating routes.

    Returns None when enforcement is disabled. Otherwise the Authorization
    header must carry a valid token whose subject is an admin e-mail.

    Raises:
        HTTPException: 401 if the token is missing or invalid, 403 if the
            subject is not on the admin list
    """
    if not settings.ENFORCE_ADMIN_AUTH:
        return None

    token = None
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            token = parts[1]

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "Missing token", "message": "Authentication required"},
            headers={"WWW-Authenticate": "Bearer"}
        )

    payload = verify_token(token)

    if not is_admin_email(payload.get("sub")):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "Forbidden", "message": "Admin access required"}
        )

    return payload
