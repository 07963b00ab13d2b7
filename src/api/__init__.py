from src.api.forecast import forecast_router
from src.api.health import health_router

__all__ = ["forecast_router", "health_router"]
