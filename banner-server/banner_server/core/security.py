"""JWT helpers guarding the operator endpoints.

Tokens are issued out of band (see ``issue_token.py``); the server only
verifies them.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from banner_server.core.config import get_settings
from banner_server.schemas import TokenData

OPERATOR_ROLES = {"operator", "admin"}

security = HTTPBearer()


def create_access_token(subject: str, role: str = "operator", expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    expire_delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": subject,
        "role": role,
        "exp": datetime.now(timezone.utc) + expire_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> TokenData:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials") from exc

    subject = payload.get("sub")
    role = payload.get("role")
    if not all([subject, role]):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    return TokenData(subject=subject, role=role)


async def get_current_operator(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> TokenData:
    token_data = decode_access_token(credentials.credentials)
    if token_data.role not in OPERATOR_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Operator role required")
    return token_data
