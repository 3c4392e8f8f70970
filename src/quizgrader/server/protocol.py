"""JSON-lines protocol messages for the grading server."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Request:
    """Incoming request: one JSON object per line."""
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        return cls(
            id=data.get("id", 0),
            method=data["method"],
            params=data.get("params") or {},
        )


@dataclass
class Response:
    """Outgoing response. Exactly one of ``result`` / ``error`` is written."""
    id: int
    result: Optional[Any] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def to_json_line(self) -> str:
        d: dict[str, Any] = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
            if self.error_type:
                d["errorType"] = self.error_type
        else:
            d["result"] = self.result
        return json.dumps(d, ensure_ascii=False) + "\n"
