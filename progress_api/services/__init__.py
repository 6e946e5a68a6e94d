# Services package
from .formatter import format_error, format_invalid_format, format_response
from .progress import ProgressService, compute_progress, percent
from .visits import VisitCounter

__all__ = [
    "format_error",
    "format_invalid_format",
    "format_response",
    "ProgressService",
    "compute_progress",
    "percent",
    "VisitCounter",
]
