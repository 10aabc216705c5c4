"""
Result builders: one function per response kind.

Each function takes the handler's arguments explicitly and returns a
ResponseDescriptor. Only ``send_file`` touches anything outside the process
(it reads the file eagerly), and only ``send_file``, ``status_only`` and
``object_with_status`` can raise.
"""
import copy
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from fastapi.encoders import jsonable_encoder

from resultdemo.core.config import get_settings
from resultdemo.core.exceptions import InvalidStatusCode, is_valid_status_code
from resultdemo.core.logging_config import LoggingConfig
from resultdemo.results.descriptor import ResponseDescriptor, ResultKind

logger = LoggingConfig.get_logger(__name__)

FOUND = 302
MOVED_PERMANENTLY = 301
OK = 200

TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"

_EMPTY_RESULT = ResponseDescriptor(kind=ResultKind.EMPTY, body="")


def _check_status(status_code: Any) -> None:
    # The range check can be switched off, the integer check cannot
    if isinstance(status_code, bool) or not isinstance(status_code, int):
        raise InvalidStatusCode(status_code)
    if get_settings().validate_status_codes and not is_valid_status_code(status_code):
        raise InvalidStatusCode(status_code)


def _redirect_status(permanent: bool) -> int:
    return MOVED_PERMANENTLY if permanent else FOUND


def render_view(name: str, model: Optional[Mapping[str, Any]] = None) -> ResponseDescriptor:
    """Render the named view as a full HTML page"""
    return ResponseDescriptor(
        kind=ResultKind.VIEW,
        target=name,
        model=dict(model) if model is not None else None,
    )


def render_json(value: Any) -> ResponseDescriptor:
    """Serialize ``value`` to JSON-compatible data with status 200"""
    return ResponseDescriptor(
        kind=ResultKind.JSON,
        payload=jsonable_encoder(value),
        status=OK,
    )


def render_text(text: str, content_type: str = TEXT_PLAIN) -> ResponseDescriptor:
    """Return ``text`` as the response body"""
    return ResponseDescriptor(
        kind=ResultKind.CONTENT,
        body=text,
        content_type=content_type,
    )


def send_file(
    path: Union[str, Path],
    mime_type: Optional[str] = None,
    download_name: Optional[str] = None,
) -> ResponseDescriptor:
    """
    Read a file and return it as a download.

    Args:
        path: File to send
        mime_type: Content type of the file (application/octet-stream if omitted)
        download_name: Filename suggested to the client (defaults to the file's name)

    Raises:
        OSError: The file does not exist or cannot be read
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as e:
        logger.warning(
            "File result could not be read",
            extra={"file_path": str(file_path), "error_type": type(e).__name__}
        )
        raise

    logger.debug(
        "File result loaded",
        extra={"file_path": str(file_path), "size": len(data)}
    )
    return ResponseDescriptor(
        kind=ResultKind.FILE,
        content=data,
        content_type=mime_type or OCTET_STREAM,
        filename=download_name or file_path.name,
    )


def redirect_to(url: str, permanent: bool = False) -> ResponseDescriptor:
    """Redirect to an absolute or relative URL"""
    return ResponseDescriptor(
        kind=ResultKind.REDIRECT,
        location=url,
        status=_redirect_status(permanent),
    )


def redirect_to_action(
    action: str,
    controller: Optional[str] = None,
    route_values: Optional[Mapping[str, Any]] = None,
    permanent: bool = False,
) -> ResponseDescriptor:
    """
    Redirect to a controller action.

    The URL is resolved when the result is rendered; a missing controller
    means the controller of the current request.
    """
    return ResponseDescriptor(
        kind=ResultKind.REDIRECT_TO_ACTION,
        action=action,
        controller=controller,
        route_values=dict(route_values) if route_values is not None else None,
        status=_redirect_status(permanent),
    )


def redirect_to_route(route_values: Mapping[str, Any], permanent: bool = False) -> ResponseDescriptor:
    """Redirect to the route described by ``route_values`` (controller, action, parameters)"""
    return ResponseDescriptor(
        kind=ResultKind.REDIRECT_TO_ROUTE,
        route_values=dict(route_values),
        status=_redirect_status(permanent),
    )


def status_only(status_code: int) -> ResponseDescriptor:
    """Bare status code with an empty body"""
    _check_status(status_code)
    return ResponseDescriptor(
        kind=ResultKind.STATUS_CODE,
        status=status_code,
        body="",
    )


def empty() -> ResponseDescriptor:
    """Response with no content"""
    return _EMPTY_RESULT


def render_partial(name: str, model: Optional[Mapping[str, Any]] = None) -> ResponseDescriptor:
    """Render the named partial view (an HTML fragment without layout)"""
    return ResponseDescriptor(
        kind=ResultKind.PARTIAL_VIEW,
        target=name,
        model=dict(model) if model is not None else None,
    )


def object_with_status(value: Any, status_code: int = OK) -> ResponseDescriptor:
    """
    Return ``value`` with an explicit status code.

    The value is deep-copied, so later changes to the caller's object do not
    reach the result. Serialization happens when the result is rendered.
    """
    _check_status(status_code)
    return ResponseDescriptor(
        kind=ResultKind.OBJECT,
        payload=copy.deepcopy(value),
        status=status_code,
    )

