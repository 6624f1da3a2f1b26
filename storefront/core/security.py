"""
Security utilities for authentication
Handles password hashing and the built-in administrative account
"""

from dataclasses import dataclass
from passlib.context import CryptContext

from .config import Settings, settings

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class SecurityUtils:
    """Security utility functions"""

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash"""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash password using bcrypt"""
        return pwd_context.hash(password)


@dataclass(frozen=True)
class AdminAccount:
    """
    The built-in administrative account.

    It has no database row. The password hash is computed once when the
    application is built and the instance is shared read-only afterwards.
    """

    id: str
    email: str
    name: str
    password_hash: str

    def matches_email(self, email: str) -> bool:
        return email.strip().lower() == self.email.lower()

    def verify_password(self, password: str) -> bool:
        return SecurityUtils.verify_password(password, self.password_hash)


def build_admin_account(config: Settings) -> AdminAccount:
    """Create the administrative account from configuration"""
    return AdminAccount(
        id=config.ADMIN_ID,
        email=config.ADMIN_EMAIL.lower(),
        name=config.ADMIN_NAME,
        password_hash=SecurityUtils.hash_password(config.ADMIN_PASSWORD),
    )
