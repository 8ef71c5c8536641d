"""Route handlers for Web API."""

from tutorials.web.routes.health import router as health_router
from tutorials.web.routes.home import router as home_router
from tutorials.web.routes.tutorials import router as tutorials_router

__all__ = [
    "health_router",
    "home_router",
    "tutorials_router",
]
