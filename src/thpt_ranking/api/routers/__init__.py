"""API routers."""

from . import catalog, ranking

__all__ = ["catalog", "ranking"]
