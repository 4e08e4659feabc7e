"""JWT service for RentLedger identity tokens."""

from datetime import datetime, timedelta, timezone

import jwt

from ...config import settings


def create_access_token(email: str, expires_delta: timedelta | None = None) -> str:
    """Create a signed access token carrying the user's e-mail."""
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.access_token_expire_minutes)

    payload = {
        "sub": email,
        "email": email,
        "exp": expire,
        "iat": now,
        "type": "access",
    }
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate an access token.

    Returns:
        Token payload if valid, None if invalid or expired.
    """
    options = {}
    kwargs = {}
    if settings.jwt_issuer:
        kwargs["issuer"] = settings.jwt_issuer
        options["require"] = ["exp", "iss"]
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options=options,
            **kwargs,
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
    if payload.get("type") != "access" or not payload.get("email"):
        return None
    return payload
