# Clients package
from .notion import NotionClient

__all__ = ["NotionClient"]
