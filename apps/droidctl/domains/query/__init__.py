from .service import MAX_XML_CHARS, ScreenQuery

__all__ = [
    "MAX_XML_CHARS",
    "ScreenQuery",
]
