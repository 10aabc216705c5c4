"""
Result demo routes: one endpoint per response kind
"""
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from resultdemo.core.config import get_settings
from resultdemo.core.logging_config import LoggingConfig
from resultdemo.results import builder
from resultdemo.results.renderer import to_response

logger = LoggingConfig.get_logger(__name__)
router = APIRouter(prefix="/resultdemo", tags=["result-demo"])


@router.get("/home", name="result_demo.home", response_class=HTMLResponse)
async def home(request: Request):
    """View result: renders the home page"""
    return to_response(request, builder.render_view("result_demo/home"))


@router.get("/user-info", name="result_demo.get_user_info")
async def get_user_info(request: Request):
    """JSON result: user data"""
    user = {"username": "Alice", "age": 25}
    return to_response(request, builder.render_json(user))


@router.get("/message", name="result_demo.show_message")
async def show_message(request: Request):
    """Content result: plain text message"""
    return to_response(request, builder.render_text("This is a simple content result."))


@router.get("/download", name="result_demo.download_document")
def download_document(request: Request):
    """
    File result: sends the configured document as an attachment

    Runs in the threadpool since the file is read synchronously.
    """
    settings = get_settings()
    result = builder.send_file(
        settings.files_path / settings.download_file,
        settings.download_mime_type,
        settings.download_name,
    )
    return to_response(request, result)


@router.get("/external", name="result_demo.redirect_to_external_site")
async def redirect_to_external_site(request: Request):
    """Redirect result: external site"""
    return to_response(request, builder.redirect_to(get_settings().external_redirect_url))


@router.get("/dashboard", name="result_demo.go_to_dashboard")
async def go_to_dashboard(request: Request):
    """Redirect-to-action result: User.Dashboard"""
    return to_response(request, builder.redirect_to_action("Dashboard", "User"))


@router.get("/custom-route", name="result_demo.redirect_to_custom_route")
async def redirect_to_custom_route(request: Request):
    """Redirect-to-route result: Profile.Details with id 5"""
    result = builder.redirect_to_route({"controller": "Profile", "action": "Details", "id": 5})
    return to_response(request, result)


@router.get("/not-found", name="result_demo.return_not_found")
async def return_not_found(request: Request):
    """Status code result: 404 Not Found"""
    return to_response(request, builder.status_only(404))


@router.get("/silent", name="result_demo.execute_silently")
async def execute_silently(request: Request):
    """Empty result"""
    logger.info("Silent action executed")
    return to_response(request, builder.empty())


@router.get("/partial", name="result_demo.load_partial", response_class=HTMLResponse)
async def load_partial(request: Request):
    """Partial view result: details fragment"""
    return to_response(request, builder.render_partial("result_demo/_partial_details"))


@router.get("/data", name="result_demo.fetch_data")
async def fetch_data(request: Request):
    """Object result: product data with status 200"""
    product = {"id": 1, "name": "Laptop", "price": 999.99}
    return to_response(request, builder.object_with_status(product, 200))
