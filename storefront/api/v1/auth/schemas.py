"""
Authentication schemas for request/response validation
Field rules (email format, password length) are enforced by AuthService
"""

from pydantic import BaseModel, Field
from typing import Optional, Union

from storefront.core.session import Principal


class RegisterRequest(BaseModel):
    """User registration request"""
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)
    name: str = Field(..., max_length=100)
    phone: Optional[str] = Field(None, max_length=30)

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "jane@example.com",
                "password": "Secret123",
                "name": "Jane Doe",
                "phone": "+34 600 000 000"
            }
        }
    }


class LoginRequest(BaseModel):
    """User login request"""
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=128)

    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "admin@relojesangel.com",
                "password": "Password123"
            }
        }
    }


class RegisterResponse(BaseModel):
    message: str
    user_id: int


class UserSummary(BaseModel):
    """Public part of the session identity"""
    id: Union[int, str]
    email: str
    name: str


class LoginResponse(BaseModel):
    message: str
    user: UserSummary


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[Principal] = None


class MessageResponse(BaseModel):
    message: str
