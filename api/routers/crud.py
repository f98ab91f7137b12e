"""
CRUD Router factory - the five endpoints every resource exposes

POST / (201), GET / (paginated list), GET /{id}, PATCH /{id}, DELETE /{id} (204).
Each endpoint requires one role right, then hands over to the ResourceService.
"""

import logging
from typing import Annotated, Any, Dict, Type

from fastapi import APIRouter, Depends, Path, Request, Response
from pydantic import BaseModel

from music_commerce.access.schemas import Actor
from music_commerce.constants import OBJECT_ID_PATTERN
from music_commerce.resources import ResourceSpec
from api.dependencies import get_resource_service, require_right
from api.schemas.common import ErrorResponse, Page
from api.services.resource_service import ResourceService

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Not authenticated or not allowed"},
    403: {"model": ErrorResponse, "description": "Role lacks the required right"},
    404: {"model": ErrorResponse, "description": "Record or referenced record not found"},
}


def build_crud_router(
    resource: ResourceSpec,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    out_model: Type[BaseModel],
) -> APIRouter:
    """
    Build the router for one resource.

    Args:
        resource: Registry entry (collection, rights, ownership)
        create_model: Body of POST
        update_model: Body of PATCH
        out_model: Shape of a returned record

    Returns:
        APIRouter mounted at resource.path
    """
    router = APIRouter(prefix=resource.path, tags=[resource.name], responses=ERROR_RESPONSES)
    ItemId = Annotated[str, Path(pattern=OBJECT_ID_PATTERN, description=f"{resource.label} id")]

    @router.post("", response_model=out_model, response_model_exclude_none=True, status_code=201)
    def create_item(
        body: create_model,
        actor: Actor = Depends(require_right(resource.rights.create)),
        service: ResourceService = Depends(get_resource_service),
    ) -> Dict[str, Any]:
        return service.create(resource, actor, body.model_dump(mode="json", exclude_none=True))

    @router.get("", response_model=Page[out_model], response_model_exclude_none=True)
    def list_items(
        request: Request,
        actor: Actor = Depends(require_right(resource.rights.get)),
        service: ResourceService = Depends(get_resource_service),
    ) -> Dict[str, Any]:
        """
        Filters are the resource's recognized fields; also limit, page and
        sort_by (``field:asc,other:desc``). Unrecognized parameters are ignored.
        """
        return service.list(resource, actor, dict(request.query_params))

    @router.get("/{item_id}", response_model=out_model, response_model_exclude_none=True)
    def get_item(
        item_id: ItemId,
        actor: Actor = Depends(require_right(resource.rights.get)),
        service: ResourceService = Depends(get_resource_service),
    ) -> Dict[str, Any]:
        return service.get(resource, actor, item_id)

    @router.patch("/{item_id}", response_model=out_model, response_model_exclude_none=True)
    def update_item(
        body: update_model,
        item_id: ItemId,
        actor: Actor = Depends(require_right(resource.rights.manage)),
        service: ResourceService = Depends(get_resource_service),
    ) -> Dict[str, Any]:
        return service.update(resource, actor, item_id, body.model_dump(mode="json", exclude_none=True))

    @router.delete("/{item_id}", status_code=204, response_class=Response)
    def delete_item(
        item_id: ItemId,
        actor: Actor = Depends(require_right(resource.rights.manage)),
        service: ResourceService = Depends(get_resource_service),
    ) -> Response:
        service.delete(resource, actor, item_id)
        return Response(status_code=204)

    logger.debug(f"Built router for {resource.name} at {resource.path}")
    return router
