# Routers package
from .allowance import router as allowance_router
from .progress import router as progress_router
from .visit import router as visit_router

__all__ = ["allowance_router", "progress_router", "visit_router"]
