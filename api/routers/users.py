"""
Users Router - Account management (admin only)
"""

from music_commerce.resources import USERS
from api.routers.crud import build_crud_router
from api.schemas.users import UserCreate, UserOut, UserUpdate

router = build_crud_router(USERS, UserCreate, UserUpdate, UserOut)
