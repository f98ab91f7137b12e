"""
Role rights - which named rights each role holds.

Endpoints require one right each; the check runs before any lookup or
ownership decision.
"""

from typing import Dict, FrozenSet

from music_commerce.access.schemas import Role

_USER_RIGHTS = frozenset({
    "create_user_address",
    "get_user_addresses",
    "manage_user_addresses",
    "create_user_payment",
    "get_user_payments",
    "manage_user_payments",
    "create_shopping_session",
    "get_shopping_sessions",
    "manage_shopping_sessions",
    "create_album",
    "get_albums",
    "manage_albums",
    "create_cart_item",
    "get_cart_items",
    "manage_cart_items",
    "create_order_detail",
    "get_order_details",
    "manage_order_details",
    "create_order_item",
    "get_order_items",
    "manage_order_items",
})

_ADMIN_ONLY_RIGHTS = frozenset({
    "get_users",
    "manage_users",
    "create_label",
    "manage_labels",
    "create_genre",
    "manage_genres",
    "create_person",
    "manage_people",
    "create_artist",
    "manage_artists",
    "create_band_member",
    "manage_band_members",
    "create_record",
    "manage_records",
    "create_record_genre",
    "manage_record_genres",
})

ROLE_RIGHTS: Dict[Role, FrozenSet[str]] = {
    Role.USER: _USER_RIGHTS,
    Role.ADMIN: _USER_RIGHTS | _ADMIN_ONLY_RIGHTS,
}


def has_right(role: Role, right: str) -> bool:
    return right in ROLE_RIGHTS.get(role, frozenset())
