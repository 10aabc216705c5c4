"""
Tests for rendering results into HTTP responses
"""
import pytest
from fastapi import APIRouter, FastAPI, Request
from fastapi.testclient import TestClient
from resultdemo.results import builder
from resultdemo.results.renderer import route_name, route_segment, to_response
from starlette.routing import NoMatchFound


@pytest.fixture
def render_app():
    """
    App whose /render endpoint renders whatever result is stored on app.state.

    It also registers the named routes redirects resolve against.
    """
    app = FastAPI()

    @app.get("/render", name="demo.render")
    async def render(request: Request):
        return to_response(request, request.app.state.result)

    @app.get("/other", name="demo.other")
    async def other():
        return {"page": "other"}

    @app.get("/user/dashboard", name="user.dashboard")
    async def dashboard():
        return {"page": "dashboard"}

    # Redirect targets live on included routers, as they do in main.py
    pages = APIRouter()

    @pages.get("/profile/details/{id}", name="profile.details")
    async def details(id: int):
        return {"page": "details", "id": id}

    orders = APIRouter(prefix="/orders")

    @orders.get("/{order_id}/items/{item_id}", name="orders.item")
    async def order_item(order_id: int, item_id: int):
        return {"order_id": order_id, "item_id": item_id}

    app.include_router(pages)
    app.include_router(orders)

    return app


@pytest.fixture
def render(render_app):
    client = TestClient(render_app, follow_redirects=False)

    def _render(result):
        render_app.state.result = result
        return client.get("/render")

    return _render


def test_route_segment():
    assert route_segment("Dashboard") == "dashboard"
    assert route_segment("GoToDashboard") == "go_to_dashboard"
    assert route_segment("result_demo") == "result_demo"
    assert route_name("User", "Dashboard") == "user.dashboard"


def test_render_view(render):
    response = render(builder.render_view("user/dashboard"))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "User dashboard" in response.text
    assert "<html" in response.text


def test_render_view_with_model(render):
    response = render(builder.render_view("profile/details", {"id": 7}))
    assert "Profile id: 7" in response.text


def test_render_partial_has_no_layout(render):
    response = render(builder.render_partial("result_demo/_partial_details.html"))

    assert response.status_code == 200
    assert "Partial details" in response.text
    assert "<html" not in response.text


def test_render_json(render):
    response = render(builder.render_json({"username": "Alice", "age": 25}))

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"username": "Alice", "age": 25}


def test_render_text(render):
    response = render(builder.render_text("hello"))

    assert response.status_code == 200
    assert response.text == "hello"
    assert response.headers["content-type"] == "text/plain; charset=utf-8"


def test_render_file(render, sample_file):
    response = render(builder.send_file(sample_file, "application/pdf", "report.pdf"))

    assert response.status_code == 200
    assert response.content == b"\x00\x01sample\xff"
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="report.pdf"'


def test_render_file_non_ascii_name(render, sample_file):
    response = render(builder.send_file(sample_file, "text/plain", "résumé.txt"))
    assert response.headers["content-disposition"] == "attachment; filename*=utf-8''r%C3%A9sum%C3%A9.txt"


def test_render_redirect(render):
    response = render(builder.redirect_to("https://www.google.com"))

    assert response.status_code == 302
    assert response.headers["location"] == "https://www.google.com"


def test_render_permanent_redirect(render):
    response = render(builder.redirect_to("/new", permanent=True))
    assert response.status_code == 301


def test_render_redirect_to_action(render):
    response = render(builder.redirect_to_action("Dashboard", "User"))

    assert response.status_code == 302
    assert response.headers["location"] == "/user/dashboard"


def test_render_redirect_to_action_extra_values_go_to_query(render):
    response = render(builder.redirect_to_action("Dashboard", "User", {"tab": "stats"}))
    assert response.headers["location"] == "/user/dashboard?tab=stats"


def test_render_redirect_to_action_uses_current_controller(render):
    """Without a controller the current route's controller is used"""
    response = render(builder.redirect_to_action("Other"))
    assert response.headers["location"] == "/other"


def test_render_redirect_to_route(render):
    response = render(builder.redirect_to_route({"controller": "Profile", "action": "Details", "id": 5}))

    assert response.status_code == 302
    assert response.headers["location"] == "/profile/details/5"


def test_render_redirect_to_route_query_values(render):
    result = builder.redirect_to_route(
        {"controller": "Profile", "action": "Details", "id": 5, "ref": "home"}
    )
    response = render(result)
    assert response.headers["location"] == "/profile/details/5?ref=home"


def test_render_redirect_to_action_on_included_router(render):
    """Path parameters are found on routes registered through include_router"""
    result = builder.redirect_to_action("Item", "Orders", {"page": 2, "item_id": 9, "order_id": 3})
    response = render(result)

    assert response.status_code == 302
    assert response.headers["location"] == "/orders/3/items/9?page=2"


def test_render_redirect_to_route_missing_path_value(render):
    """A route value the path needs cannot be left out"""
    with pytest.raises(NoMatchFound):
        render(builder.redirect_to_route({"controller": "Orders", "action": "Item", "order_id": 3}))


def test_render_redirect_to_unknown_route(render):
    """Unresolvable targets surface the routing error"""
    with pytest.raises(NoMatchFound):
        render(builder.redirect_to_action("Missing", "Nowhere"))


def test_render_status_code(render):
    response = render(builder.status_only(404))

    assert response.status_code == 404
    assert response.content == b""


def test_render_empty(render):
    response = render(builder.empty())

    assert response.status_code == 200
    assert response.content == b""


def test_render_object(render):
    response = render(builder.object_with_status({"id": 1, "name": "Laptop", "price": 999.99}, 201))

    assert response.status_code == 201
    assert response.json() == {"id": 1, "name": "Laptop", "price": 999.99}
