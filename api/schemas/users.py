"""
User API Schemas - Accounts, managed by admins
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, Field

from music_commerce.access.schemas import Role
from music_commerce.constants import EMAIL_PATTERN
from api.schemas.common import CreateModel, StoredOut, UpdateModel

# stored lowercase so uniqueness is case-insensitive
Email = Annotated[str, Field(pattern=EMAIL_PATTERN), AfterValidator(str.lower)]


class UserCreate(CreateModel):
    name: str = Field(..., min_length=1, description="Display name")
    email: Email = Field(..., description="Unique login email")
    role: Role = Field(default=Role.USER, description="'user' or 'admin'")


class UserUpdate(UpdateModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[Email] = None
    role: Optional[Role] = None


class UserOut(StoredOut):
    name: str
    email: str
    role: Role
