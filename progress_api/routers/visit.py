"""
Visit counter endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from progress_api.dependencies import get_visit_counter
from progress_api.routers.common import ERROR_RESPONSES, ROUTED_METHODS
from progress_api.schemas.responses import OutputFormat
from progress_api.services.formatter import format_response
from progress_api.services.visits import VisitCounter
from progress_api.utils.error_handlers import catch_faults
from progress_api.utils.exceptions import BadRequestError

router = APIRouter(tags=["Visits"])


@router.api_route(
    "/visit{rest:path}",
    methods=ROUTED_METHODS,
    responses=ERROR_RESPONSES,
    summary="Record Visit",
    description="Increment and return the visit counters of a site (and optionally a page)."
)
@catch_faults
async def record_visit(
    rest: str,
    database_id: Optional[str] = Query(default=None, description="Site identifier"),
    page_id: Optional[str] = Query(default=None, description="Site identifier, used when database_id is absent"),
    url: Optional[str] = Query(default=None, description="Page path to count as well"),
    fmt: Optional[str] = Query(default=None, alias="format", description="json | svg | iframe | html"),
    counter: VisitCounter = Depends(get_visit_counter)
) -> Response:
    """
    Count one visit and return `{total, today, page?}`.

    Every call increments; reloads and retries are counted too.
    """
    output = OutputFormat.parse(fmt)
    site_id = database_id or page_id
    if not site_id:
        raise BadRequestError("Missing database_id or page_id")

    counters = await counter.record_visit(site_id, url)
    return format_response(counters, output, "Visits")
