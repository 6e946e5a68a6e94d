"""
Typed views over the parts of a Notion database query response we read.

Only the fields needed to evaluate a status property are modelled; every other
key in the upstream payload is ignored.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class StatusOption(BaseModel):
    """Selected option of a status property."""
    name: Optional[str] = None


class NotionProperty(BaseModel):
    """A single named property of a page."""
    type: Optional[str] = None
    status: Optional[StatusOption] = None


class NotionPage(BaseModel):
    """A page (row) returned by a database query."""
    id: Optional[str] = None
    properties: Dict[str, NotionProperty] = Field(default_factory=dict)

    def get_property(self, name: str) -> Optional[NotionProperty]:
        return self.properties.get(name)

    def status_name(self, property_name: str) -> Optional[str]:
        """
        Name of the selected status option of `property_name`.

        Returns None when the property is missing, is not a status property,
        or has no option selected.
        """
        prop = self.get_property(property_name)
        if prop is None or prop.status is None:
            return None
        return prop.status.name


class NotionQueryResult(BaseModel):
    """First page of a database query."""
    results: List[NotionPage]
    has_more: bool = False
    next_cursor: Optional[str] = None
