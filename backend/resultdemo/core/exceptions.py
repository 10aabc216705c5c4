"""
Error types raised while building results
"""
from typing import Any, Dict

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599


class InvalidStatusCode(ValueError):
    """Status code outside the HTTP range 100-599"""

    def __init__(self, status_code: Any):
        self.status_code = status_code
        super().__init__(
            f"Invalid HTTP status code {status_code!r}: "
            f"expected an integer between {MIN_STATUS_CODE} and {MAX_STATUS_CODE}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detail": str(self),
            "type": type(self).__name__,
            "status_code": self.status_code,
        }


def is_valid_status_code(status_code: Any) -> bool:
    """Check that a value is an integer HTTP status code"""
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        return False
    return MIN_STATUS_CODE <= status_code <= MAX_STATUS_CODE
