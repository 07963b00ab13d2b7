from src.api.forecast.forecast_routes import router as forecast_router

__all__ = ["forecast_router"]
