"""Post content: generation and sanitization"""

from .generator import GeminiGenerator
from .sanitize import first_nonblank_line, sanitize, strip_markers

__all__ = [
    "GeminiGenerator",
    "first_nonblank_line",
    "sanitize",
    "strip_markers",
]
