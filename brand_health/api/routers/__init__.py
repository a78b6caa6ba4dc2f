"""
brand_health/api/routers package marker.
"""

from brand_health.api.routers.brand_health import router as brand_health_router
from brand_health.api.routers.moz import router as moz_router
from brand_health.api.routers.scrape import router as scrape_router
from brand_health.api.routers.trends import router as trends_router

__all__ = [
    "brand_health_router",
    "moz_router",
    "scrape_router",
    "trends_router",
]
