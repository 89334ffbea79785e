"""Core utilities: configuration, logging, errors and the query language."""

from dataitem.core.config import AppConfig, DbConfig
from dataitem.core.logging import Logger, color_palette, log

__all__ = ["AppConfig", "DbConfig", "Logger", "log", "color_palette"]
