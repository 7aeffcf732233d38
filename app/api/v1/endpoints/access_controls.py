"""Access controls API: module x role matrix per (project, channel).

GET builds or reconciles the matrix, POST createOrUpdate replaces it,
DELETE soft-deletes it, and the collection GET lists stored matrices.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_access_control_key,
    get_access_control_service,
)
from app.application.dtos.access_control import AccessControlFilter
from app.application.services.access_control_service import AccessControlService
from app.core.limiter import limit_writes
from app.domain.value_objects import (
    IDENTIFIER_MAX_LENGTH,
    IDENTIFIER_PATTERN,
    AccessControlKey,
)
from app.schemas.access_control import (
    AccessControlPageResponse,
    AccessControlResponse,
    AccessControlUpsertRequest,
)

router = APIRouter()

_SORT_FIELDS = {"createdAt": "created_at", "updatedAt": "updated_at"}


def _id_query(alias: str):
    return Query(
        alias=alias,
        min_length=1,
        max_length=IDENTIFIER_MAX_LENGTH,
        pattern=IDENTIFIER_PATTERN,
    )


@router.get("", response_model=AccessControlPageResponse)
async def list_access_controls(
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
    project_id: Annotated[str | None, _id_query("projectId")] = None,
    channel_id: Annotated[str | None, _id_query("channelId")] = None,
    module_id: Annotated[str | None, _id_query("moduleId")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    sort_by: Annotated[Literal["createdAt", "updatedAt"], Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[Literal["asc", "desc"], Query(alias="sortOrder")] = "desc",
) -> AccessControlPageResponse:
    """List stored matrices (soft-deleted excluded). Items carry ids and statuses only."""
    result = await service.list_access_controls(
        AccessControlFilter(
            project_id=project_id, channel_id=channel_id, module_id=module_id
        ),
        page=page,
        limit=limit,
        sort_by=_SORT_FIELDS[sort_by],
        sort_order=sort_order,
    )
    return AccessControlPageResponse.from_page(result)


@router.get(
    "/project/{projectId}/channel/{channelId}",
    response_model=AccessControlResponse,
)
async def get_access_control(
    key: Annotated[AccessControlKey, Depends(get_access_control_key)],
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> AccessControlResponse:
    """Return the matrix, creating the default one or appending new modules/roles first."""
    view = await service.get_or_create_default(
        project_id=key.project_id, channel_id=key.channel_id
    )
    return AccessControlResponse.from_view(view)


@router.post(
    "/project/{projectId}/channel/{channelId}/createOrUpdate",
    response_model=AccessControlResponse,
)
@limit_writes
async def create_or_update_access_control(
    request: Request,
    body: AccessControlUpsertRequest,
    key: Annotated[AccessControlKey, Depends(get_access_control_key)],
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> AccessControlResponse:
    """Replace the whole matrix with the body; all-or-nothing."""
    view = await service.create_or_update(
        project_id=key.project_id,
        channel_id=key.channel_id,
        module_configs=body.to_entities(),
    )
    return AccessControlResponse.from_view(view)


@router.delete("/project/{projectId}/channel/{channelId}", status_code=204)
@limit_writes
async def delete_access_control(
    request: Request,
    key: Annotated[AccessControlKey, Depends(get_access_control_key)],
    service: Annotated[AccessControlService, Depends(get_access_control_service)],
) -> Response:
    """Soft-delete the matrix; the next GET builds a fresh default."""
    await service.soft_delete(project_id=key.project_id, channel_id=key.channel_id)
    return Response(status_code=204)
