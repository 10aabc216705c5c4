"""
Template rendering utilities
"""
from pathlib import PurePosixPath

from fastapi.templating import Jinja2Templates

from resultdemo.core.config import get_settings

TEMPLATES_DIR = get_settings().templates_path
TEMPLATE_SUFFIX = ".html"

# Create FastAPI templates instance
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def template_name(view_name: str) -> str:
    """Map a view name to a template file name ("user/dashboard" -> "user/dashboard.html")"""
    if PurePosixPath(view_name).suffix:
        return view_name
    return f"{view_name}{TEMPLATE_SUFFIX}"
