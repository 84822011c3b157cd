from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

router = APIRouter()

LOGIN_PAGE = "/index.html"
DATA_PANEL_PAGE = "/dados-login.html"


@router.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    return RedirectResponse(url=LOGIN_PAGE, status_code=status.HTTP_302_FOUND)
