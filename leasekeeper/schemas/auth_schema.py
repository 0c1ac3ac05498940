from pydantic import BaseModel, ConfigDict, EmailStr
from datetime import datetime
from typing import Optional

from leasekeeper.enums.account_status import AccountStatus
from leasekeeper.enums.role import Role


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    phone: str
    password: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AdminLoginRequest(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class Principal(BaseModel):
    """The verified holder of a bearer token."""

    subject: str
    role: Role
    account_id: Optional[int] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    is_active: bool
    is_banned: bool
    status: AccountStatus
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
