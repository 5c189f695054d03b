from favicon_grabber.api.router import router, get_resolver

__all__ = ["router", "get_resolver"]
