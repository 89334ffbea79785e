"""Domain models for data items."""

from dataitem.core.models.items import DataItem, DimensionItemType, ValueType

__all__ = ["DataItem", "DimensionItemType", "ValueType"]
