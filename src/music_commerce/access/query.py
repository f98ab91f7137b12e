"""
Query normalizer - turns a raw list query into a FilterSpec.

Only the filter fields a list operation declares survive; values are coerced
to their declared kind, pagination gets defaults and bounds, and for
unprivileged actors the owner scoping is either injected or left for the
access decision to reject, depending on the deployment's ListScopePolicy.
"""

import logging
import math
import re
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from music_commerce.access.schemas import Actor
from music_commerce.constants import OBJECT_ID_PATTERN
from music_commerce.errors import ValidationError

logger = logging.getLogger(__name__)

PAGINATION_FIELDS = ("limit", "page", "sort_by")
TIMESTAMP_FIELDS = ("created_at", "updated_at")

_OBJECT_ID_RE = re.compile(OBJECT_ID_PATTERN)
_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}


class ListScopePolicy(str, Enum):
    """What to do with an unprivileged list query that names no owner"""
    REJECT = "reject"  # leave it; the access decision answers DENIED_MISSING_FILTER
    INJECT = "inject"  # scope it to the caller


class FieldKind(Enum):
    STR = "str"
    ID = "id"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DATE = "date"


@dataclass(frozen=True)
class ListQuerySpec:
    """Recognized fields of one list operation"""
    filter_fields: Mapping[str, FieldKind]
    sortable: bool = True
    owner_field: Optional[str] = None  # filter field naming the owner directly
    owner_scoped: bool = False  # unprivileged callers only see their own records

    @property
    def sort_fields(self) -> Tuple[str, ...]:
        return tuple(self.filter_fields) + TIMESTAMP_FIELDS


@dataclass(frozen=True)
class SortField:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class FilterSpec:
    """Normalized list query handed to the persistence collaborator"""
    filters: Dict[str, Any] = field(default_factory=dict)
    limit: int = 10
    page: int = 1
    sort_by: Tuple[SortField, ...] = ()
    owner_id: Optional[str] = None  # owner constraint, always derived from the actor

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total_results: int) -> int:
        return math.ceil(total_results / self.limit)

    def scoped_to(self, owner_id: str) -> "FilterSpec":
        return replace(self, owner_id=owner_id)


def normalize(
    raw_query: Mapping[str, Any],
    query_spec: ListQuerySpec,
    actor: Actor,
    policy: ListScopePolicy = ListScopePolicy.REJECT,
    default_limit: int = 10,
    max_limit: int = 100,
) -> FilterSpec:
    """
    Project a raw query onto the recognized field set of a list operation.

    Args:
        raw_query: Query parameters as received (values usually strings)
        query_spec: Fields the list operation recognizes
        actor: Authenticated caller
        policy: Deployment-wide handling of unscoped unprivileged queries
        default_limit: Page size when the query sets none
        max_limit: Largest page size accepted

    Returns:
        FilterSpec ready for persistence

    Raises:
        ValidationError: a filter, limit, page or sort value is malformed
    """
    dropped = sorted(
        key for key in raw_query
        if key not in query_spec.filter_fields and key not in PAGINATION_FIELDS
    )
    if dropped:
        logger.debug(f"Dropping unrecognized query fields: {dropped}")

    filters: Dict[str, Any] = {}
    for name, kind in query_spec.filter_fields.items():
        value = raw_query.get(name)
        if value is None:
            continue
        filters[name] = coerce_value(name, kind, value)

    limit = _positive_int("limit", raw_query.get("limit"), default_limit)
    if limit > max_limit:
        raise ValidationError(f'"limit" must be less than or equal to {max_limit}')
    page = _positive_int("page", raw_query.get("page"), 1)

    sort_by: Tuple[SortField, ...] = ()
    if query_spec.sortable and raw_query.get("sort_by"):
        sort_by = parse_sort(str(raw_query["sort_by"]), query_spec.sort_fields)

    owner_id = None
    if query_spec.owner_scoped and not actor.is_privileged and policy is ListScopePolicy.INJECT:
        owner_id = actor.id
        if query_spec.owner_field and query_spec.owner_field not in filters:
            filters[query_spec.owner_field] = actor.id

    return FilterSpec(filters=filters, limit=limit, page=page, sort_by=sort_by, owner_id=owner_id)


def coerce_value(name: str, kind: FieldKind, value: Any) -> Any:
    """Coerce one filter value to its declared scalar kind"""
    if kind is FieldKind.BOOL:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ValidationError(f'"{name}" must be a boolean')

    if kind is FieldKind.INT:
        if isinstance(value, bool):
            raise ValidationError(f'"{name}" must be an integer')
        try:
            return int(str(value).strip())
        except ValueError:
            raise ValidationError(f'"{name}" must be an integer')

    if kind is FieldKind.FLOAT:
        if isinstance(value, bool):
            raise ValidationError(f'"{name}" must be a number')
        try:
            number = float(str(value).strip())
        except ValueError:
            raise ValidationError(f'"{name}" must be a number')
        if not math.isfinite(number):
            raise ValidationError(f'"{name}" must be a number')
        return number

    if kind is FieldKind.ID:
        text = str(value).strip()
        if not _OBJECT_ID_RE.match(text):
            raise ValidationError(f'"{name}" must be a valid id')
        return text

    if kind is FieldKind.DATE:
        try:
            return date.fromisoformat(str(value).strip()).isoformat()
        except ValueError:
            raise ValidationError(f'"{name}" must be a date (YYYY-MM-DD)')

    return str(value)


def parse_sort(raw: str, allowed: Tuple[str, ...]) -> Tuple[SortField, ...]:
    """
    Parse ``field:asc`` / ``field:desc`` keys separated by commas.

    The direction defaults to ascending.
    """
    keys = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        name, _, direction = chunk.partition(":")
        direction = direction.strip().lower() or "asc"
        if name not in allowed:
            raise ValidationError(f'"sort_by" cannot sort on "{name}"')
        if direction not in ("asc", "desc"):
            raise ValidationError('"sort_by" direction must be "asc" or "desc"')
        keys.append(SortField(field=name, descending=direction == "desc"))
    return tuple(keys)


def _positive_int(name: str, value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f'"{name}" must be an integer')
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        if not re.fullmatch(r"[+-]?\d+", text):
            raise ValidationError(f'"{name}" must be an integer')
        number = int(text)
    if number < 1:
        raise ValidationError(f'"{name}" must be greater than or equal to 1')
    return number
