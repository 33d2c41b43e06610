from lobby.api.rooms import router as rooms_router
from lobby.api.system import router as system_router, debug_router

__all__ = ["rooms_router", "system_router", "debug_router"]
