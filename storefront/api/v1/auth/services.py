"""
Authentication service layer
Handles business logic for authentication
"""

from typing import Any, Dict, MutableMapping, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, and_
import logging

from storefront.models import User
from storefront.core.config import settings
from storefront.core.security import AdminAccount, SecurityUtils, pwd_context
from storefront.core.session import Principal, PrincipalKind, read_principal
from storefront.core.exceptions import (
    ValidationException,
    ConflictException,
    AuthenticationException,
)
from storefront.middleware.security import sanitize_text
from storefront.utils.validators import validate_email_address

logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service"""

    def __init__(self, db: AsyncSession, admin: AdminAccount):
        self.db = db
        self.admin = admin

    @staticmethod
    def _normalize_email(email: str) -> str:
        try:
            return validate_email_address(email)
        except ValueError:
            raise ValidationException("Please enter a valid email address")

    async def register(
        self,
        email: str,
        password: str,
        name: str,
        phone: Optional[str] = None
    ) -> int:
        """
        Register new user

        Args:
            email: Account email, stored lower-cased
            password: Plain password, at least PASSWORD_MIN_LENGTH characters
            name: Display name
            phone: Optional phone number

        Returns:
            ID of the new user

        Raises:
            ValidationException: If any field is malformed
            ConflictException: If the email is taken or is the administrative email
        """
        email = self._normalize_email(email)

        if len(password or "") < settings.PASSWORD_MIN_LENGTH:
            raise ValidationException(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long"
            )

        name = sanitize_text(name) or ""
        if not name:
            raise ValidationException("Name is required")

        phone = sanitize_text(phone) or None

        # The administrative account owns its email even without a row
        if self.admin.matches_email(email):
            raise ConflictException()

        existing = await self.db.execute(select(User.id).where(User.email == email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictException()

        user = User(
            email=email,
            password_hash=SecurityUtils.hash_password(password),
            name=name,
            phone=phone,
        )
        self.db.add(user)

        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            await self.db.rollback()
            raise ConflictException()

        await self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user.id

    async def login(self, email: str, password: str) -> Principal:
        """
        Authenticate and return the principal to store in the session

        The administrative account is checked first, then active registered
        users. Every failure raises the same AuthenticationException.
        """
        email = self._normalize_email(email)
        if not password:
            raise ValidationException("Password is required")

        if self.admin.matches_email(email) and self.admin.verify_password(password):
            logger.info("Administrative login")
            return Principal(
                id=self.admin.id,
                email=self.admin.email,
                name=self.admin.name,
                kind=PrincipalKind.ADMINISTRATIVE,
            )

        result = await self.db.execute(
            select(User).where(
                and_(User.email == email, User.is_active == True)
            )
        )
        user = result.scalar_one_or_none()

        if user is None:
            # Same hashing cost as a real check so response time does not reveal the account
            pwd_context.dummy_verify()
        elif SecurityUtils.verify_password(password, user.password_hash):
            logger.info(f"User {user.id} logged in")
            return Principal(
                id=user.id,
                email=user.email,
                name=user.name,
                kind=PrincipalKind.REGISTERED,
            )

        logger.info("Failed login attempt")
        raise AuthenticationException("Invalid credentials", error_code="INVALID_CREDENTIALS")

    @staticmethod
    def current_session(session: MutableMapping[str, Any]) -> Dict[str, Any]:
        """Describe the session; never raises"""
        principal = read_principal(session)
        if principal is None:
            return {"authenticated": False, "user": None}
        return {"authenticated": True, "user": principal}
