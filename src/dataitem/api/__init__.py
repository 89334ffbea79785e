"""HTTP routes for the data item API."""

from dataitem.api.routers.dataitems import DataItemRouter

__all__ = ["DataItemRouter"]
