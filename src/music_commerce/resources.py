"""
Resource registry - one declarative ResourceSpec per resource type.

A spec says where a resource's owner lives, which other records it refers
to, which fields its list operation recognizes, which rights guard it, which
keys must stay unique and what goes away with it on delete. The service layer
runs the same pipeline for every resource off these declarations.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from music_commerce.access.query import FieldKind, ListQuerySpec

OWNER_FIELD = "user_id"


@dataclass(frozen=True)
class OwnerPath:
    """
    Where a record's owner is found.

    Direct: the record's own ``field`` holds the owner id.
    Indirect: ``field`` holds the id of a record in collection ``via`` whose
    ``user_id`` is the owner.
    """
    field: str = OWNER_FIELD
    via: Optional[str] = None

    @property
    def is_direct(self) -> bool:
        return self.via is None


@dataclass(frozen=True)
class Reference:
    field: str
    collection: str
    label: str
    owned: bool = False  # unprivileged callers may only point at their own record


@dataclass(frozen=True)
class Cascade:
    collection: str
    field: str


@dataclass(frozen=True)
class Rights:
    create: str
    get: str
    manage: str


@dataclass(frozen=True)
class ResourceSpec:
    name: str
    label: str
    path: str
    list_query: ListQuerySpec
    rights: Rights
    owner: Optional[OwnerPath] = None
    references: Tuple[Reference, ...] = ()
    public_read: bool = False
    unique_keys: Tuple[Tuple[str, ...], ...] = ()
    cascades: Tuple[Cascade, ...] = ()

    @property
    def is_owned(self) -> bool:
        return self.owner is not None

    @property
    def owner_reference(self) -> Optional[Reference]:
        """Reference the owner is read through, for indirectly owned resources"""
        if self.owner is None or self.owner.is_direct:
            return None
        for reference in self.references:
            if reference.field == self.owner.field:
                return reference
        return None


S, ID, INT, FLOAT, BOOL, DATE = (
    FieldKind.STR, FieldKind.ID, FieldKind.INT, FieldKind.FLOAT, FieldKind.BOOL, FieldKind.DATE,
)

USER_REFERENCE = Reference("user_id", "users", "User")


def _owned_list(filter_fields, owner_field: Optional[str] = OWNER_FIELD) -> ListQuerySpec:
    return ListQuerySpec(filter_fields=filter_fields, owner_field=owner_field, owner_scoped=True)


USERS = ResourceSpec(
    name="users",
    label="User",
    path="/users",
    list_query=ListQuerySpec(filter_fields={"name": S, "email": S, "role": S}),
    rights=Rights(create="manage_users", get="get_users", manage="manage_users"),
    unique_keys=(("email",),),
    cascades=(
        Cascade("user_addresses", "user_id"),
        Cascade("albums", "user_id"),
        Cascade("shopping_sessions", "user_id"),
        Cascade("user_payments", "user_id"),
    ),
)

LABELS = ResourceSpec(
    name="labels",
    label="Label",
    path="/labels",
    list_query=ListQuerySpec(filter_fields={"name": S, "country": S}),
    rights=Rights(create="create_label", get="manage_labels", manage="manage_labels"),
    unique_keys=(("name",),),
)

GENRES = ResourceSpec(
    name="genres",
    label="Genre",
    path="/genres",
    list_query=ListQuerySpec(filter_fields={"name": S}),
    rights=Rights(create="create_genre", get="manage_genres", manage="manage_genres"),
)

PEOPLE = ResourceSpec(
    name="people",
    label="Person",
    path="/people",
    list_query=ListQuerySpec(filter_fields={
        "name": S, "date_of_birth": DATE, "alive": BOOL, "gender": S, "nationality": S,
    }),
    rights=Rights(create="create_person", get="manage_people", manage="manage_people"),
)

ARTISTS = ResourceSpec(
    name="artists",
    label="Artist",
    path="/artists",
    list_query=ListQuerySpec(filter_fields={"name": S, "country": S, "label_id": ID}),
    rights=Rights(create="create_artist", get="manage_artists", manage="manage_artists"),
    references=(Reference("label_id", "labels", "Label"),),
    unique_keys=(("name",),),
)

BAND_MEMBERS = ResourceSpec(
    name="band_members",
    label="Band member",
    path="/band-members",
    list_query=ListQuerySpec(filter_fields={"artist_id": ID, "person_id": ID}, sortable=False),
    rights=Rights(create="create_band_member", get="manage_band_members", manage="manage_band_members"),
    references=(
        Reference("artist_id", "artists", "Artist"),
        Reference("person_id", "people", "Person"),
    ),
)

RECORDS = ResourceSpec(
    name="records",
    label="Record",
    path="/records",
    list_query=ListQuerySpec(filter_fields={
        "name": S, "artist_id": ID, "label_id": ID, "release_year": INT, "language": S,
    }),
    rights=Rights(create="create_record", get="manage_records", manage="manage_records"),
    references=(
        Reference("artist_id", "artists", "Artist"),
        Reference("label_id", "labels", "Label"),
    ),
)

RECORD_GENRES = ResourceSpec(
    name="record_genres",
    label="Record genre",
    path="/record-genres",
    list_query=ListQuerySpec(filter_fields={"genre_id": ID, "record_id": ID}, sortable=False),
    rights=Rights(create="create_record_genre", get="manage_record_genres", manage="manage_record_genres"),
    references=(
        Reference("genre_id", "genres", "Genre"),
        Reference("record_id", "records", "Record"),
    ),
)

USER_ADDRESSES = ResourceSpec(
    name="user_addresses",
    label="User address",
    path="/user-addresses",
    list_query=_owned_list({"user_id": ID, "city": S, "state": S, "country": S}),
    rights=Rights(create="create_user_address", get="get_user_addresses", manage="manage_user_addresses"),
    owner=OwnerPath(),
    references=(USER_REFERENCE,),
    unique_keys=((
        "user_id", "street_name", "building_number", "apartment_number",
        "complement", "postal_code", "city", "state", "country",
    ),),
)

USER_PAYMENTS = ResourceSpec(
    name="user_payments",
    label="User payment",
    path="/user-payments",
    list_query=_owned_list({"user_id": ID, "account_number": S, "payment_type": S, "provider": S}),
    rights=Rights(create="create_user_payment", get="get_user_payments", manage="manage_user_payments"),
    owner=OwnerPath(),
    references=(USER_REFERENCE,),
    unique_keys=(("account_number", "provider"),),
    cascades=(Cascade("order_details", "user_payment_id"),),
)

SHOPPING_SESSIONS = ResourceSpec(
    name="shopping_sessions",
    label="Shopping session",
    path="/shopping-sessions",
    list_query=_owned_list({"user_id": ID, "total": FLOAT}),
    rights=Rights(create="create_shopping_session", get="get_shopping_sessions", manage="manage_shopping_sessions"),
    owner=OwnerPath(),
    references=(USER_REFERENCE,),
    cascades=(Cascade("cart_items", "shopping_session_id"),),
)

# Albums are marketplace listings: any authenticated user can browse them,
# only the seller (or an admin) can change them.
ALBUMS = ResourceSpec(
    name="albums",
    label="Album",
    path="/albums",
    list_query=ListQuerySpec(filter_fields={
        "user_id": ID, "record_id": ID, "stock": INT, "format": S,
        "description": S, "year": INT, "new": BOOL, "price": FLOAT,
    }),
    rights=Rights(create="create_album", get="get_albums", manage="manage_albums"),
    owner=OwnerPath(),
    references=(USER_REFERENCE, Reference("record_id", "records", "Record")),
    public_read=True,
    unique_keys=(("user_id", "record_id", "year", "new"),),
    cascades=(Cascade("cart_items", "album_id"), Cascade("order_items", "album_id")),
)

CART_ITEMS = ResourceSpec(
    name="cart_items",
    label="Cart item",
    path="/cart-items",
    list_query=_owned_list(
        {"shopping_session_id": ID, "album_id": ID, "quantity": INT}, owner_field=None,
    ),
    rights=Rights(create="create_cart_item", get="get_cart_items", manage="manage_cart_items"),
    owner=OwnerPath(field="shopping_session_id", via="shopping_sessions"),
    references=(
        Reference("shopping_session_id", "shopping_sessions", "Shopping session"),
        Reference("album_id", "albums", "Album"),
    ),
)

ORDER_DETAILS = ResourceSpec(
    name="order_details",
    label="Order detail",
    path="/order-details",
    list_query=_owned_list({"user_id": ID, "user_payment_id": ID, "total": FLOAT}),
    rights=Rights(create="create_order_detail", get="get_order_details", manage="manage_order_details"),
    owner=OwnerPath(),
    references=(
        USER_REFERENCE,
        Reference("user_payment_id", "user_payments", "User payment", owned=True),
    ),
    cascades=(Cascade("order_items", "order_detail_id"),),
)

ORDER_ITEMS = ResourceSpec(
    name="order_items",
    label="Order item",
    path="/order-items",
    list_query=_owned_list(
        {"order_detail_id": ID, "album_id": ID, "quantity": INT}, owner_field=None,
    ),
    rights=Rights(create="create_order_item", get="get_order_items", manage="manage_order_items"),
    owner=OwnerPath(field="order_detail_id", via="order_details"),
    references=(
        Reference("order_detail_id", "order_details", "Order detail"),
        Reference("album_id", "albums", "Album"),
    ),
)

RESOURCES: Tuple[ResourceSpec, ...] = (
    USERS, LABELS, GENRES, PEOPLE, ARTISTS, BAND_MEMBERS, RECORDS, RECORD_GENRES,
    USER_ADDRESSES, USER_PAYMENTS, SHOPPING_SESSIONS, ALBUMS, CART_ITEMS,
    ORDER_DETAILS, ORDER_ITEMS,
)

_BY_NAME: Dict[str, ResourceSpec] = {resource.name: resource for resource in RESOURCES}


def get_resource(name: str) -> ResourceSpec:
    return _BY_NAME[name]


def unique_keys() -> Dict[str, Tuple[Tuple[str, ...], ...]]:
    """Unique keys per collection, as the repository enforces them"""
    return {resource.name: resource.unique_keys for resource in RESOURCES if resource.unique_keys}
