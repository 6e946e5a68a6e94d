"""
Allowance endpoint (reserved).
"""

from fastapi import APIRouter
from fastapi.responses import Response

from progress_api.routers.common import ERROR_RESPONSES, ROUTED_METHODS
from progress_api.utils.exceptions import NotImplementedFeatureError

router = APIRouter(tags=["Allowance"])


@router.api_route(
    "/allowance{rest:path}",
    methods=ROUTED_METHODS,
    responses={**ERROR_RESPONSES, 501: {"description": "Reserved, not implemented"}},
    summary="Allowance (not implemented)"
)
async def get_allowance(rest: str) -> Response:
    raise NotImplementedFeatureError("Allowance")
