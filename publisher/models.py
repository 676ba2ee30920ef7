"""Data models for post publishing"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class GeneratedPost:
    """Generator output and its sanitized form (never persisted)"""
    raw: str
    sanitized: str


@dataclass
class PostResult:
    """Outcome of a successful publish

    Attributes:
        text: The text that was submitted
        data: Post record returned by the platform
    """
    text: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def post_id(self) -> Any:
        return self.data.get("id")

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "data": self.data}
