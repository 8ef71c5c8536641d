"""Tutorial endpoints.

Route order matters: /published is registered before /{tutorial_id} so the
literal path is never read as an id.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends, Query, Request, status

from tutorials.core.tutorial import Tutorial, validate_tutorial
from tutorials.db.tutorials_repository import TutorialsRepository
from tutorials.web.errors import ApiError
from tutorials.web.schemas import (
    MessageResponse,
    TutorialCreatedResponse,
    TutorialDetailResponse,
    TutorialListResponse,
    TutorialResponse,
    ValidationErrorResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/tutorials",
    tags=["tutorials"],
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
)


def get_repository(request: Request) -> TutorialsRepository:
    """Repository attached to the app at startup."""
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Database connection is not available.",
        )
    return repository


def _to_response(tutorials: list[Tutorial]) -> TutorialListResponse:
    return TutorialListResponse(
        tutorials=[TutorialResponse(**t.to_dict()) for t in tutorials],
    )


@router.get("", response_model=TutorialListResponse)
async def list_tutorials(
    title: str | None = Query(default=None),
    repository: TutorialsRepository = Depends(get_repository),
) -> TutorialListResponse:
    """List tutorials, optionally matching a title substring (case-insensitive)."""
    try:
        tutorials = await repository.list_all(title)
    except Exception as e:
        logger.error("tutorial.list_failed", title=title, error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(e) or "Some error occurred while retrieving the tutorials.",
        ) from e
    return _to_response(tutorials)


@router.post(
    "",
    response_model=TutorialCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}},
)
async def create_tutorial(
    body: dict[str, Any] | None = Body(default=None),
    repository: TutorialsRepository = Depends(get_repository),
) -> TutorialCreatedResponse:
    """Create a new tutorial."""
    values = validate_tutorial(body).raise_for_errors()

    try:
        tutorial_id = await repository.create(values)
    except Exception as e:
        logger.error("tutorial.create_failed", error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(e) or "Some error occurred while creating the tutorial.",
        ) from e

    return TutorialCreatedResponse(
        msg="New tutorial created.",
        URL=f"/tutorials/{tutorial_id}",
    )


@router.get("/published", response_model=TutorialListResponse)
async def list_published_tutorials(
    repository: TutorialsRepository = Depends(get_repository),
) -> TutorialListResponse:
    """List published tutorials."""
    try:
        tutorials = await repository.list_published()
    except Exception as e:
        logger.error("tutorial.list_published_failed", error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Error retrieving published tutorials.",
        ) from e
    return _to_response(tutorials)


@router.get(
    "/{tutorial_id}",
    response_model=TutorialDetailResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": MessageResponse}},
)
async def get_tutorial(
    tutorial_id: str,
    repository: TutorialsRepository = Depends(get_repository),
) -> TutorialDetailResponse:
    """Get a specific tutorial by ID."""
    try:
        tutorial = await repository.get(tutorial_id)
    except Exception as e:
        logger.error("tutorial.get_failed", tutorial_id=tutorial_id, error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Error retrieving tutorial with ID {tutorial_id}.",
        ) from e

    if tutorial is None:
        raise ApiError(
            status.HTTP_404_NOT_FOUND,
            f"Cannot find any tutorial with ID {tutorial_id}.",
        )

    return TutorialDetailResponse(tutorial=TutorialResponse(**tutorial.to_dict()))


@router.put(
    "/{tutorial_id}",
    response_model=MessageResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
    },
)
async def update_tutorial(
    tutorial_id: str,
    body: dict[str, Any] | None = Body(default=None),
    repository: TutorialsRepository = Depends(get_repository),
) -> MessageResponse:
    """Update a tutorial. Only the fields present in the body change."""
    if not body or not body.get("title"):
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Request body can not be empty!")

    values = validate_tutorial(body, partial=True).raise_for_errors()

    try:
        updated = await repository.update(tutorial_id, values)
    except Exception as e:
        logger.error("tutorial.update_failed", tutorial_id=tutorial_id, error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Error updating tutorial with ID {tutorial_id}.",
        ) from e

    if not updated:
        raise ApiError(
            status.HTTP_404_NOT_FOUND,
            f"Cannot update tutorial with ID {tutorial_id}. Maybe Tutorial was not found!",
        )

    return MessageResponse(
        success=True,
        msg=f"Tutorial with ID {tutorial_id} was updated successfully.",
    )


@router.delete(
    "/{tutorial_id}",
    response_model=MessageResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": MessageResponse}},
)
async def delete_tutorial(
    tutorial_id: str,
    repository: TutorialsRepository = Depends(get_repository),
) -> MessageResponse:
    """Delete a tutorial by ID."""
    try:
        deleted = await repository.delete(tutorial_id)
    except Exception as e:
        logger.error("tutorial.delete_failed", tutorial_id=tutorial_id, error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Error deleting tutorial with ID {tutorial_id}.",
        ) from e

    if not deleted:
        raise ApiError(
            status.HTTP_404_NOT_FOUND,
            f"Cannot delete tutorial with ID {tutorial_id}. Maybe Tutorial was not found!",
        )

    return MessageResponse(
        success=True,
        msg=f"Tutorial with ID {tutorial_id} was deleted successfully.",
    )
