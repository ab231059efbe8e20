"""Static bearer-token check guarding the bookmark routes."""
import logging
import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme; missing/malformed headers yield None instead of a 403
security = HTTPBearer(auto_error=False)


def is_valid_token(token: str, expected: str) -> bool:
    """Exact match of the presented token against the configured secret."""
    return secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


async def verify_api_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Dependency that rejects requests without the configured bearer token.

    Covers a missing `Authorization` header, a non-Bearer scheme, an empty
    token segment and a token that doesn't match `API_TOKEN`.
    """
    if credentials is None or not is_valid_token(credentials.credentials, settings.api_token):
        logger.warning("Unauthorized request to path: %s", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized request",
            headers={"WWW-Authenticate": "Bearer"},
        )
