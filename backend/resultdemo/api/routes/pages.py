"""
Page routes targeted by the demo redirects
"""
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from resultdemo.results import builder
from resultdemo.results.renderer import to_response

router = APIRouter(tags=["pages"])


@router.get("/user/dashboard", name="user.dashboard", response_class=HTMLResponse)
async def user_dashboard(request: Request):
    """User dashboard page"""
    return to_response(request, builder.render_view("user/dashboard"))


@router.get("/profile/details/{id}", name="profile.details", response_class=HTMLResponse)
async def profile_details(request: Request, id: int):
    """Profile details page"""
    return to_response(request, builder.render_view("profile/details", {"id": id}))
