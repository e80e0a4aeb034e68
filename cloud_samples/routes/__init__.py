"""API routes package."""

from cloud_samples.routes.health import router as health_router
from cloud_samples.routes.hello import router as hello_router
from cloud_samples.routes.objects import router as objects_router

__all__ = ["health_router", "hello_router", "objects_router"]
