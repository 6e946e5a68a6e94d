"""
Route settings shared by every endpoint.

Endpoints are matched by path prefix and answer any method; OPTIONS never
reaches them because the request middleware answers it first.
"""

from progress_api.schemas.responses import ErrorResponse

ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid query parameter"},
    500: {"model": ErrorResponse, "description": "Upstream failure or unexpected error"},
}
