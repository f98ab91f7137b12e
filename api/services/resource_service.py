"""
Resource Service - the request pipeline shared by every resource type

Resolve referenced entities -> Apply access decision -> Normalize query (list)
-> Execute persistence operation. Shape validation has already happened in
the router (pydantic); each stage may short-circuit with an ApiError.
"""

import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

from music_commerce.access.decision import enforce
from music_commerce.access.query import FilterSpec, ListScopePolicy, normalize
from music_commerce.access.schemas import AccessRequest, Actor, Decision, Operation
from music_commerce.errors import ConflictError, InternalError, NotFoundError
from music_commerce.resources import OWNER_FIELD, ResourceSpec, get_resource

from api.repositories.base import (
    BaseRepository,
    DuplicateRecordError,
    RecordNotFoundError,
    RepositoryError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceService:
    """
    Runs create/get/list/update/delete for any ResourceSpec.

    Existence of the target and of every referenced record is checked
    before, and independently of, the access decision.
    """

    def __init__(
        self,
        repository: BaseRepository,
        scope_policy: ListScopePolicy = ListScopePolicy.REJECT,
        default_limit: int = 10,
        max_limit: int = 100,
    ):
        self.repository = repository
        self.scope_policy = scope_policy
        self.default_limit = default_limit
        self.max_limit = max_limit

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create(self, resource: ResourceSpec, actor: Actor, data: Mapping[str, Any]) -> Dict[str, Any]:
        resolved = self._resolve_references(resource, data)
        self._authorize(resource, actor, Operation.CREATE, self._owner_of(resource, data, resolved))
        self._check_owned_references(resource, actor, Operation.CREATE, resolved)

        return self._persist(resource, "create", lambda: self.repository.create(resource.name, data))

    def get(self, resource: ResourceSpec, actor: Actor, record_id: str) -> Dict[str, Any]:
        record = self._find(resource.name, record_id, resource.label)
        if not resource.public_read:
            self._authorize(resource, actor, Operation.READ, self._owner_of(resource, record))
        return record

    def list(self, resource: ResourceSpec, actor: Actor, raw_query: Mapping[str, Any]) -> Dict[str, Any]:
        """
        List one page of records.

        Returns:
            Dict with results, page, limit, total_pages and total_results
        """
        spec = normalize(
            raw_query,
            resource.list_query,
            actor,
            policy=self.scope_policy,
            default_limit=self.default_limit,
            max_limit=self.max_limit,
        )

        if resource.public_read:
            result = self._persist(resource, "list", lambda: self.repository.query(resource.name, spec))
            return asdict(result)

        self._authorize(resource, actor, Operation.LIST, self._list_owner(resource, spec))
        if resource.is_owned and not actor.is_privileged:
            # the persisted query is always bounded by the caller's own id
            spec = spec.scoped_to(actor.id)

        result = self._persist(
            resource, "list", lambda: self.repository.query(resource.name, spec, resource.owner)
        )
        return asdict(result)

    def update(
        self,
        resource: ResourceSpec,
        actor: Actor,
        record_id: str,
        changes: Mapping[str, Any]
    ) -> Dict[str, Any]:
        record = self._find(resource.name, record_id, resource.label)
        resolved = self._resolve_references(resource, changes)
        self._authorize(resource, actor, Operation.UPDATE, self._owner_of(resource, record))

        # moving a record to another owner needs the right to own it there too
        if resource.owner is not None and resource.owner.field in changes:
            merged = {**record, **changes}
            self._authorize(resource, actor, Operation.UPDATE, self._owner_of(resource, merged, resolved))
        self._check_owned_references(resource, actor, Operation.UPDATE, resolved)

        return self._persist(
            resource, "update", lambda: self.repository.update(resource.name, record_id, changes)
        )

    def delete(self, resource: ResourceSpec, actor: Actor, record_id: str) -> None:
        record = self._find(resource.name, record_id, resource.label)
        self._authorize(resource, actor, Operation.DELETE, self._owner_of(resource, record))

        self._persist(resource, "delete", lambda: self._delete_with_dependents(resource.name, record_id))

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def _find(self, collection: str, record_id: str, label: str) -> Dict[str, Any]:
        record = self.repository.get(collection, record_id)
        if record is None:
            raise NotFoundError(f"{label} not found")
        return record

    def _resolve_references(self, resource: ResourceSpec, data: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
        """Load every record the payload points at, keyed by field"""
        resolved = {}
        for reference in resource.references:
            value = data.get(reference.field)
            if value is None:
                continue
            resolved[reference.field] = self._find(reference.collection, value, reference.label)
        return resolved

    def _owner_of(
        self,
        resource: ResourceSpec,
        record: Mapping[str, Any],
        resolved: Optional[Mapping[str, Dict[str, Any]]] = None
    ) -> Optional[str]:
        """Owner id of a (possibly not yet stored) record, or None"""
        owner = resource.owner
        if owner is None:
            return None
        if owner.is_direct:
            return record.get(owner.field)

        parent_id = record.get(owner.field)
        if parent_id is None:
            return None
        parent = (resolved or {}).get(owner.field) or self.repository.get(owner.via, parent_id)
        if parent is None:
            logger.warning(f"{resource.label} {record.get('id')} points at missing {owner.via} {parent_id}")
            return None
        return parent.get(OWNER_FIELD)

    def _list_owner(self, resource: ResourceSpec, spec: FilterSpec) -> Optional[str]:
        """Owner named by a normalized list query, or None"""
        owner = resource.owner
        if owner is None:
            return None
        if owner.is_direct:
            return spec.filters.get(owner.field)

        parent_id = spec.filters.get(owner.field)
        if parent_id is not None:
            reference = resource.owner_reference
            label = reference.label if reference is not None else owner.via
            return self._find(owner.via, parent_id, label).get(OWNER_FIELD)
        return spec.owner_id

    def _authorize(
        self,
        resource: ResourceSpec,
        actor: Actor,
        operation: Operation,
        target_owner_id: Optional[str]
    ) -> Decision:
        request = AccessRequest(actor=actor, operation=operation, target_owner_id=target_owner_id)
        return enforce(request, f"Not allowed to {operation.value} this {resource.label.lower()}")

    def _check_owned_references(
        self,
        resource: ResourceSpec,
        actor: Actor,
        operation: Operation,
        resolved: Mapping[str, Dict[str, Any]]
    ) -> None:
        for reference in resource.references:
            if not reference.owned or reference.field not in resolved:
                continue
            request = AccessRequest(
                actor=actor,
                operation=operation,
                target_owner_id=resolved[reference.field].get(OWNER_FIELD),
            )
            enforce(request, f"Not allowed to use this {reference.label.lower()}")

    def _delete_with_dependents(self, collection: str, record_id: str) -> None:
        """Delete a record after everything that depends on it, depth first"""
        for cascade in get_resource(collection).cascades:
            for child in self.repository.find(cascade.collection, {cascade.field: record_id}):
                self._delete_with_dependents(cascade.collection, child["id"])
        self.repository.delete(collection, record_id)

    def _persist(self, resource: ResourceSpec, action: str, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except DuplicateRecordError as e:
            logger.info(f"Conflict on {action} {resource.name}: {e}")
            raise ConflictError(f"{resource.label} already exists")
        except RecordNotFoundError:
            raise NotFoundError(f"{resource.label} not found")
        except (RepositoryError, OSError) as e:
            logger.error(f"Failed to {action} {resource.name}: {e}", exc_info=True)
            raise InternalError(f"Could not {action} {resource.label.lower()}")
