"""Credential checks and token issuance."""

from __future__ import annotations

import logging

from dealerhub.auth.jwt import REFRESH_TOKEN, TokenPair, create_token_pair, decode_jwt
from dealerhub.core.exceptions import AuthenticationError
from dealerhub.core.security import verify_password
from dealerhub.models import User
from dealerhub.models.base import utcnow
from dealerhub.repositories import UserRepository
from dealerhub.services.base_service import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    def __init__(self, db, settings=None) -> None:
        super().__init__(db, settings)
        self.users = UserRepository(db)

    def issue_tokens(self, user: User) -> TokenPair:
        return create_token_pair(
            user_id=user.id,
            company_id=user.company_id,
            email=user.email,
            is_admin=user.is_admin,
            secret=self.settings.JWT_SECRET,
            access_ttl_minutes=self.settings.JWT_ACCESS_TTL_MINUTES,
            refresh_ttl_days=self.settings.JWT_REFRESH_TTL_DAYS,
        )

    def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        with self.transaction():
            user = self.users.find_by_email(email)
            if user is None or not verify_password(password, user.password_hash, pepper=self.settings.PASSWORD_PEPPER):
                logger.info("auth.login.rejected", extra={"event": "auth.login.rejected"})
                raise AuthenticationError("Invalid email or password.")
            user.last_login_at = utcnow()
        logger.info("auth.login.succeeded", extra={"event": "auth.login.succeeded", "user_id": user.id})
        return user, self.issue_tokens(user)

    def refresh(self, refresh_token: str) -> TokenPair:
        claims = decode_jwt(refresh_token, secret=self.settings.JWT_SECRET)
        if claims.get("token_use") != REFRESH_TOKEN:
            raise AuthenticationError("Token is not a refresh token.")
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AuthenticationError("Invalid auth claims.") from exc
        user = self.users.get(user_id)
        if user is None:
            raise AuthenticationError("User no longer exists.")
        return self.issue_tokens(user)
