"""
Session identity
The server-side session holds the principal descriptor, never credentials
"""

from enum import Enum
from typing import Any, MutableMapping, Optional, Union
from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError
import logging

from .exceptions import AuthenticationException
from .security import AdminAccount

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"
SESSION_CART_KEY = "cart"


class PrincipalKind(str, Enum):
    ADMINISTRATIVE = "administrative"
    REGISTERED = "registered"


class Principal(BaseModel):
    """Identity stored in the session at login"""

    id: Union[int, str]
    email: str
    name: str
    kind: PrincipalKind

    @property
    def is_admin(self) -> bool:
        return self.kind == PrincipalKind.ADMINISTRATIVE


def start_session(session: MutableMapping[str, Any], principal: Principal) -> None:
    """Replace whatever the session held with a fresh identity"""
    session.clear()
    session[SESSION_USER_KEY] = principal.model_dump(mode="json")


def end_session(session: MutableMapping[str, Any]) -> None:
    """Drop the identity and any session-resident cart. Safe to call twice."""
    session.clear()


def read_principal(session: MutableMapping[str, Any]) -> Optional[Principal]:
    """Return the session principal, or None when absent or malformed"""
    payload = session.get(SESSION_USER_KEY)
    if not payload:
        return None

    try:
        return Principal.model_validate(payload)
    except ValidationError:
        logger.warning("Discarding malformed session identity")
        return None


# Dependencies

def get_admin_account(request: Request) -> AdminAccount:
    """The administrative account built at application start-up"""
    return request.app.state.admin_account


async def get_optional_principal(request: Request) -> Optional[Principal]:
    """Current principal if logged in, otherwise None"""
    return read_principal(request.session)


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """Current principal (required), raises 401 otherwise"""
    if principal is None:
        raise AuthenticationException()
    return principal
