from service.routers.entities import router as entities_router
from service.routers.scenarios import router as scenarios_router
from service.routers.stats import router as stats_router

__all__ = ["entities_router", "scenarios_router", "stats_router"]
