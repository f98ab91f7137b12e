"""
Commerce Routers - Per-user resources

Unprivileged callers only ever see and change their own records; album
listings can be browsed by any authenticated user.
"""

from music_commerce import resources
from api.routers.crud import build_crud_router
from api.schemas import commerce as schemas

routers = [
    build_crud_router(
        resources.USER_ADDRESSES, schemas.UserAddressCreate, schemas.UserAddressUpdate, schemas.UserAddressOut
    ),
    build_crud_router(
        resources.USER_PAYMENTS, schemas.UserPaymentCreate, schemas.UserPaymentUpdate, schemas.UserPaymentOut
    ),
    build_crud_router(
        resources.SHOPPING_SESSIONS,
        schemas.ShoppingSessionCreate,
        schemas.ShoppingSessionUpdate,
        schemas.ShoppingSessionOut,
    ),
    build_crud_router(resources.ALBUMS, schemas.AlbumCreate, schemas.AlbumUpdate, schemas.AlbumOut),
    build_crud_router(resources.CART_ITEMS, schemas.CartItemCreate, schemas.CartItemUpdate, schemas.CartItemOut),
    build_crud_router(
        resources.ORDER_DETAILS, schemas.OrderDetailCreate, schemas.OrderDetailUpdate, schemas.OrderDetailOut
    ),
    build_crud_router(
        resources.ORDER_ITEMS, schemas.OrderItemCreate, schemas.OrderItemUpdate, schemas.OrderItemOut
    ),
]
