"""
dataitem-py: analytics data item search and tracker import context loading.
"""

from dataitem.app import DataItemApi, create_app
from dataitem.core.config import AppConfig, DbConfig
from dataitem.queries.service import DataItemService

__version__ = "0.1.0"

__all__ = ["AppConfig", "DbConfig", "DataItemApi", "DataItemService", "create_app"]
