# Schemas package
from .notion import NotionPage, NotionProperty, NotionQueryResult, StatusOption
from .responses import ErrorResponse, OutputFormat, PageVisits, ProgressResult, VisitCounters

__all__ = [
    "NotionPage",
    "NotionProperty",
    "NotionQueryResult",
    "StatusOption",
    "ErrorResponse",
    "OutputFormat",
    "PageVisits",
    "ProgressResult",
    "VisitCounters",
]
