"""
Transport boundary: turns ResponseDescriptors into Starlette responses
"""
import re
from itertools import combinations
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.routing import NoMatchFound

from resultdemo.core.logging_config import LoggingConfig
from resultdemo.core.templates import template_name, templates
from resultdemo.results.descriptor import ResponseDescriptor, ResultKind

logger = LoggingConfig.get_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Route values that select the route rather than fill it
CONTROLLER_KEY = "controller"
ACTION_KEY = "action"


def route_segment(name: str) -> str:
    """Normalize a controller or action name ("GoToDashboard" -> "go_to_dashboard")"""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).lower()


def route_name(controller: str, action: str) -> str:
    """Name under which a controller action is registered"""
    return f"{route_segment(controller)}.{route_segment(action)}"


def _ambient_route(request: Request) -> Tuple[Optional[str], Optional[str]]:
    """Controller and action of the route serving the current request"""
    route = request.scope.get("route")
    name = getattr(route, "name", None) or ""
    controller, sep, action = name.rpartition(".")
    if not sep:
        return None, None
    return controller, action


def _split_path_params(request: Request, name: str, values: Dict[str, Any]):
    """
    Find which values are path parameters of the named route.

    url_path_for matches a route on its name and exact parameter set, at any
    depth of included routers. Larger parameter sets are tried first.
    """
    keys = list(values)
    for size in range(len(keys), -1, -1):
        for selected in combinations(keys, size):
            path_params = {k: values[k] for k in selected}
            try:
                path = request.app.url_path_for(name, **path_params)
            except NoMatchFound:
                continue
            query = {k: v for k, v in values.items() if k not in path_params}
            return path, query
    raise NoMatchFound(name, values)


def resolve_url(
    request: Request,
    controller: Optional[str],
    action: Optional[str],
    values: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Build the URL of a controller action.

    Missing controller or action fall back to the current request's route.
    Values naming a path parameter of the target route fill the path; the
    rest go into the query string.

    Raises:
        starlette.routing.NoMatchFound: No route matches the name and parameters
    """
    ambient_controller, ambient_action = _ambient_route(request)
    controller = controller or ambient_controller
    action = action or ambient_action
    if not controller or not action:
        raise ValueError("Cannot resolve a redirect target without controller and action")

    name = route_name(controller, action)
    values = dict(values or {})

    path, query = _split_path_params(request, name, values)
    url = str(path)
    if query:
        url = f"{url}?{urlencode(query, doseq=True)}"
    return url


def _render_template(request: Request, result: ResponseDescriptor, is_partial: bool) -> Response:
    return templates.TemplateResponse(
        request=request,
        name=template_name(result.target),
        context={"model": result.model or {}, "is_partial": is_partial},
    )


def _render_view(request: Request, result: ResponseDescriptor) -> Response:
    return _render_template(request, result, is_partial=False)


def _render_partial(request: Request, result: ResponseDescriptor) -> Response:
    return _render_template(request, result, is_partial=True)


def _render_json(request: Request, result: ResponseDescriptor) -> Response:
    return JSONResponse(content=result.payload, status_code=result.status)


def _render_content(request: Request, result: ResponseDescriptor) -> Response:
    return Response(content=result.body, media_type=result.content_type)


def _content_disposition(filename: str) -> str:
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'


def _render_file(request: Request, result: ResponseDescriptor) -> Response:
    return Response(
        content=result.content,
        media_type=result.content_type,
        headers={"Content-Disposition": _content_disposition(result.filename)},
    )


def _render_redirect(request: Request, result: ResponseDescriptor) -> Response:
    return RedirectResponse(url=result.location, status_code=result.status)


def _render_redirect_to_action(request: Request, result: ResponseDescriptor) -> Response:
    url = resolve_url(request, result.controller, result.action, result.route_values)
    return RedirectResponse(url=url, status_code=result.status)


def _render_redirect_to_route(request: Request, result: ResponseDescriptor) -> Response:
    values = dict(result.route_values)
    controller = values.pop(CONTROLLER_KEY, None)
    action = values.pop(ACTION_KEY, None)
    url = resolve_url(request, controller, action, values)
    return RedirectResponse(url=url, status_code=result.status)


def _render_status_code(request: Request, result: ResponseDescriptor) -> Response:
    return Response(status_code=result.status)


def _render_empty(request: Request, result: ResponseDescriptor) -> Response:
    return Response()


def _render_object(request: Request, result: ResponseDescriptor) -> Response:
    return JSONResponse(content=jsonable_encoder(result.payload), status_code=result.status)


RENDERERS: Dict[ResultKind, Callable[[Request, ResponseDescriptor], Response]] = {
    ResultKind.VIEW: _render_view,
    ResultKind.JSON: _render_json,
    ResultKind.CONTENT: _render_content,
    ResultKind.FILE: _render_file,
    ResultKind.REDIRECT: _render_redirect,
    ResultKind.REDIRECT_TO_ACTION: _render_redirect_to_action,
    ResultKind.REDIRECT_TO_ROUTE: _render_redirect_to_route,
    ResultKind.STATUS_CODE: _render_status_code,
    ResultKind.EMPTY: _render_empty,
    ResultKind.PARTIAL_VIEW: _render_partial,
    ResultKind.OBJECT: _render_object,
}


def to_response(request: Request, result: ResponseDescriptor) -> Response:
    """Render a result into the HTTP response sent to the client"""
    response = RENDERERS[result.kind](request, result)

    extra: Dict[str, Any] = {
        "result_kind": result.kind.value,
        "status_code": response.status_code,
    }
    if result.target is not None:
        extra["result_target"] = result.target
    if result.is_redirect:
        extra["location"] = response.headers.get("location")
    logger.debug("Result rendered", extra=extra)

    return response
