"""
Progress endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from progress_api.dependencies import get_progress_service
from progress_api.routers.common import ERROR_RESPONSES, ROUTED_METHODS
from progress_api.schemas.responses import OutputFormat
from progress_api.services.formatter import format_response
from progress_api.services.progress import ProgressService
from progress_api.utils.error_handlers import catch_faults
from progress_api.utils.exceptions import BadRequestError

router = APIRouter(tags=["Progress"])


@router.api_route(
    "/progress{rest:path}",
    methods=ROUTED_METHODS,
    responses=ERROR_RESPONSES,
    summary="Database Completion Progress",
    description="Percentage of items in a Notion database whose status equals a condition."
)
@catch_faults
async def get_progress(
    rest: str,
    api_key: Optional[str] = Query(default=None, description="Notion integration token"),
    database_id: Optional[str] = Query(default=None, description="Notion database ID"),
    property_name: Optional[str] = Query(default=None, description="Status property name"),
    condition: Optional[str] = Query(default=None, description="Status name counted as completed"),
    fmt: Optional[str] = Query(default=None, alias="format", description="json | svg | iframe | html"),
    service: ProgressService = Depends(get_progress_service)
) -> Response:
    """
    Query the database once and report `{total, completed, progress}`.

    - **api_key** / **database_id**: required
    - **property_name**: defaults to the configured status property
    - **condition**: defaults to the configured "done" status name
    - **format**: output representation (default: json)

    Only the first page of query results is counted.
    """
    output = OutputFormat.parse(fmt)
    if not api_key or not database_id:
        raise BadRequestError("Missing API Key or Database ID")

    result = await service.get_progress(api_key, database_id, property_name, condition)
    return format_response(result, output, "Progress")
