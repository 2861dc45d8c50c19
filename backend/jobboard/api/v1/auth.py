"""
Token authentication dependencies.

Private routes read the ``x-auth-token: Bearer <token>`` header and get the
caller's verified claims.
"""

from typing import Optional

from fastapi import Depends, Header

from jobboard.core.errors import Unauthenticated
from jobboard.core.security import TokenClaims, TokenService, get_token_service


async def get_optional_claims(
    x_auth_token: Optional[str] = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
) -> Optional[TokenClaims]:
    """Claims of the caller, or None when no token was sent."""
    if not x_auth_token:
        return None
    return tokens.verify(x_auth_token)


async def get_current_claims(
    claims: Optional[TokenClaims] = Depends(get_optional_claims),
) -> TokenClaims:
    """
    Dependency for private routes.

    Raises Unauthenticated when the header is missing; InvalidToken and
    TokenExpired propagate from verification.
    """
    if claims is None:
        raise Unauthenticated()
    return claims
