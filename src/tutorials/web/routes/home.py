"""Root endpoint."""

from fastapi import APIRouter

from tutorials.web.schemas import HomeResponse

router = APIRouter(tags=["home"])


@router.get("/", response_model=HomeResponse)
async def home() -> HomeResponse:
    return HomeResponse(message="home -- TUTORIALS api")
