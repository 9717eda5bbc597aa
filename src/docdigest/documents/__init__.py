from .models import Heading, Page, ParsedDocument

__all__ = [
    "Heading",
    "Page",
    "ParsedDocument",
]
