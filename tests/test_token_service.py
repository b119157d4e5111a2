from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from quota_engine.infrastructure.security.token_service import JwtTokenService


SECRET = "quota-engine-test-secret-0123456789"


def _token(payload: dict, secret: str = SECRET) -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


def test_decode_access_token_returns_tenant():
    service = JwtTokenService(jwt_secret=SECRET)
    token = _token(
        {
            "sub": "tenant-1",
            "type": "access",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        }
    )

    assert service.decode_access_token(token=token).tenant_id == "tenant-1"


@pytest.mark.parametrize(
    "token",
    [
        _token({"sub": "tenant-1", "type": "access"}, secret="another-test-secret-0123456789abcdef"),
        _token({"sub": "tenant-1", "type": "refresh"}),
        _token({"type": "access"}),
        _token({"sub": "tenant-1", "type": "access", "exp": datetime(2020, 1, 1, tzinfo=timezone.utc)}),
        "not-a-token",
    ],
)
def test_decode_access_token_rejects_invalid_tokens(token):
    service = JwtTokenService(jwt_secret=SECRET)

    with pytest.raises(ValueError):
        service.decode_access_token(token=token)
