from app.routers.health import router as health_router
from app.routers.items import router as items_router

__all__ = ["health_router", "items_router"]
