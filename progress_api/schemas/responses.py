"""
Response schemas for the API.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from progress_api.utils.exceptions import InvalidFormatError


class OutputFormat(str, Enum):
    """Output representation selected with the `format` query parameter."""
    JSON = "json"
    SVG = "svg"
    IFRAME = "iframe"
    HTML = "html"

    @classmethod
    def parse(cls, value: Optional[str]) -> "OutputFormat":
        """Parse a raw query value, defaulting to JSON when absent."""
        if value is None or value == "":
            return cls.JSON
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormatError(value)

    @property
    def is_html(self) -> bool:
        return self in (OutputFormat.IFRAME, OutputFormat.HTML)


class ProgressResult(BaseModel):
    """Completion progress of a Notion database."""
    total: int = Field(ge=0)
    completed: int = Field(ge=0)
    progress: int = Field(ge=0, le=100)


class PageVisits(BaseModel):
    """Visit count of a single page path."""
    url: str
    count: int = Field(ge=0)


class VisitCounters(BaseModel):
    """Visit counters after the current visit was recorded."""
    total: int = Field(ge=0)
    today: int = Field(ge=0)
    page: Optional[PageVisits] = None


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    message: str
