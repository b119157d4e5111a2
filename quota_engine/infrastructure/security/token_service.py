from __future__ import annotations

import jwt

from quota_engine.application.dto.auth import AccessTokenPayload


class JwtTokenService:
    """Validates HS256 access tokens issued by the account service."""

    def __init__(self, *, jwt_secret: str):
        self._jwt_secret = jwt_secret

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        try:
            payload = jwt.decode(token, self._jwt_secret, algorithms=["HS256"])
        except jwt.PyJWTError as exc:
            raise ValueError("Invalid access token.") from exc

        if payload.get("type") != "access":
            raise ValueError("Invalid token type.")

        tenant_id = payload.get("sub")
        if not tenant_id or not isinstance(tenant_id, str):
            raise ValueError("Invalid token subject.")

        return AccessTokenPayload(tenant_id=tenant_id)
