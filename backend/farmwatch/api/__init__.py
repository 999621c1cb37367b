from farmwatch.api.routes import router

__all__ = ["router"]
