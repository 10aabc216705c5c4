"""
Response descriptors: what a request handler wants sent back to the client.

A descriptor is a single tagged value. The transport layer switches on
``kind`` to turn it into an HTTP response (see ``resultdemo.results.renderer``);
handlers never build Starlette responses themselves.
"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator, model_validator

from resultdemo.core.config import get_settings
from resultdemo.core.exceptions import MAX_STATUS_CODE, MIN_STATUS_CODE


class ResultKind(str, Enum):
    """Response kinds a handler can produce"""
    VIEW = "view"
    JSON = "json"
    CONTENT = "content"
    FILE = "file"
    REDIRECT = "redirect"
    REDIRECT_TO_ACTION = "redirect_to_action"
    REDIRECT_TO_ROUTE = "redirect_to_route"
    STATUS_CODE = "status_code"
    EMPTY = "empty"
    PARTIAL_VIEW = "partial_view"
    OBJECT = "object"


# Fields that must be set for each kind
REQUIRED_FIELDS: Dict[ResultKind, tuple] = {
    ResultKind.VIEW: ("target",),
    ResultKind.JSON: ("status",),
    ResultKind.CONTENT: ("body", "content_type"),
    ResultKind.FILE: ("content", "content_type", "filename"),
    ResultKind.REDIRECT: ("location", "status"),
    ResultKind.REDIRECT_TO_ACTION: ("action", "status"),
    ResultKind.REDIRECT_TO_ROUTE: ("route_values", "status"),
    ResultKind.STATUS_CODE: ("status", "body"),
    ResultKind.EMPTY: ("body",),
    ResultKind.PARTIAL_VIEW: ("target",),
    ResultKind.OBJECT: ("status",),
}

REDIRECT_KINDS = frozenset([
    ResultKind.REDIRECT,
    ResultKind.REDIRECT_TO_ACTION,
    ResultKind.REDIRECT_TO_ROUTE,
])


class ResponseDescriptor(BaseModel):
    """
    Immutable description of an HTTP response.

    Only the fields relevant to ``kind`` are populated; the rest stay None.
    """
    model_config = ConfigDict(frozen=True)

    kind: ResultKind
    status: Optional[StrictInt] = None

    # Views
    target: Optional[str] = None
    model: Optional[Dict[str, Any]] = None

    # Bodies
    payload: Any = None
    body: Optional[str] = None
    content_type: Optional[str] = None
    content: Optional[bytes] = None
    filename: Optional[str] = None

    # Redirects
    location: Optional[str] = None
    action: Optional[str] = None
    controller: Optional[str] = None
    route_values: Optional[Dict[str, Any]] = None

    @field_validator('status')
    @classmethod
    def check_status_range(cls, v):
        """Status codes stay within 100-599 unless validation is switched off"""
        if v is not None and get_settings().validate_status_codes:
            if not MIN_STATUS_CODE <= v <= MAX_STATUS_CODE:
                raise ValueError(f"status {v} is outside {MIN_STATUS_CODE}-{MAX_STATUS_CODE}")
        return v

    @model_validator(mode='after')
    def check_required_fields(self):
        """Reject descriptors missing a field their kind needs"""
        missing = [
            name for name in REQUIRED_FIELDS[self.kind]
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(
                f"{self.kind.value} result requires: {', '.join(missing)}"
            )
        return self

    @property
    def is_redirect(self) -> bool:
        return self.kind in REDIRECT_KINDS

    def to_dict(self) -> Dict[str, Any]:
        """Convert descriptor to a JSON-safe dictionary (file bytes reported by size)"""
        data = self.model_dump(exclude_none=True, exclude={"content"})
        data["kind"] = self.kind.value
        if self.content is not None:
            data["content_length"] = len(self.content)
        return data
