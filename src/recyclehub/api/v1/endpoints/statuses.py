"""Order and payment status endpoints.

Provides:
- GET /statuses/{kind} for the paginated list of active statuses
- GET /statuses/{kind}/default for the status assigned to new records
- GET /statuses/{kind}/{name} for the display payload of one status

The default route is registered first, so "default" is a reserved path
segment: a status stored under that name cannot be fetched by name here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from recyclehub.api.dependencies import get_status_service
from recyclehub.core.exceptions import NotFoundError
from recyclehub.database.repositories.status import StatusRecord  # noqa: TC001
from recyclehub.schemas.response import PaginatedResponse, SuccessResponse
from recyclehub.schemas.status import StatusDisplay, StatusKind, StatusSummary
from recyclehub.services.status.service import StatusService  # noqa: TC001
from recyclehub.utils.pagination import create_pagination_meta, get_pagination_params


router = APIRouter(tags=["Statuses"])


def _to_summary(record: StatusRecord) -> StatusSummary:
    return StatusSummary.model_validate(record.model_dump(exclude={"is_active"}))


@router.get(
    "/statuses/{kind}",
    response_model=PaginatedResponse[StatusSummary],
    summary="List active statuses",
    description="Active order or payment statuses in display order.",
)
async def list_statuses(
    kind: StatusKind,
    service: Annotated[StatusService, Depends(get_status_service)],
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> PaginatedResponse[StatusSummary]:
    """List active statuses of one kind, one page at a time."""
    params = get_pagination_params(page, limit)
    records = await service.list_statuses(kind)
    page_items = records[params.skip : params.skip + params.limit]

    return PaginatedResponse[StatusSummary](
        data=[_to_summary(record) for record in page_items],
        pagination=create_pagination_meta(len(records), params.page, params.limit),
    )


@router.get(
    "/statuses/{kind}/default",
    response_model=SuccessResponse[StatusSummary],
    summary="Get the default status",
    description=(
        "Status assigned to newly created orders or payments. Declared before "
        "the by-name route, so `default` is not available as a status name."
    ),
    responses={404: {"description": "No default status configured"}},
)
async def get_default_status(
    kind: StatusKind,
    service: Annotated[StatusService, Depends(get_status_service)],
) -> SuccessResponse[StatusSummary]:
    """Return the status assigned to newly created orders or payments."""
    record = await service.get_default_status(kind)
    if record is None:
        raise NotFoundError(f"Default {kind} status", "default")
    return SuccessResponse[StatusSummary](data=_to_summary(record))


@router.get(
    "/statuses/{kind}/{name}",
    response_model=SuccessResponse[StatusDisplay],
    summary="Get status display information",
    description=(
        "Label, colour and description used to render a status. Unknown "
        "names are echoed back with the neutral colour. The name `default` is "
        "reserved for the default-status route."
    ),
)
async def get_status_display(
    kind: StatusKind,
    name: str,
    service: Annotated[StatusService, Depends(get_status_service)],
) -> SuccessResponse[StatusDisplay]:
    """Return the display payload for one status."""
    display = await service.get_status_for_display(kind, name)
    return SuccessResponse[StatusDisplay](data=display)
