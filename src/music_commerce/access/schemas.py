from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Role(Enum):
    ADMIN = "admin"
    USER = "user"


class Operation(Enum):
    CREATE = "create"
    READ = "read"
    LIST = "list"
    UPDATE = "update"
    DELETE = "delete"


class Reason(Enum):
    SELF = "SELF"
    PRIVILEGED = "PRIVILEGED"
    DENIED_NOT_OWNER = "DENIED_NOT_OWNER"
    DENIED_MISSING_FILTER = "DENIED_MISSING_FILTER"


@dataclass(frozen=True)
class Actor:
    """Authenticated caller, built once per request"""
    id: str
    role: Role

    @property
    def is_privileged(self) -> bool:
        return self.role is Role.ADMIN


@dataclass(frozen=True)
class AccessRequest:
    """
    Input of one access decision.

    target_owner_id is the owner of the targeted resource, or for list
    operations the owner named by the query filter (None when absent).
    """
    actor: Actor
    operation: Operation
    target_owner_id: Optional[str] = None


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Reason
