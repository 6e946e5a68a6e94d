"""
FastAPI dependencies.

Everything a handler needs is built from what create_app put on `app.state`.
"""

from fastapi import Request

from progress_api.services.progress import ProgressService
from progress_api.services.visits import VisitCounter


def get_progress_service(request: Request) -> ProgressService:
    state = request.app.state
    return ProgressService(state.settings, transport=state.notion_transport)


def get_visit_counter(request: Request) -> VisitCounter:
    state = request.app.state
    return VisitCounter(state.counter_store, timezone=state.settings.visit_timezone, clock=state.clock)
