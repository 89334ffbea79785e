# src/dataitem/queries/base.py
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Sequence

from sqlalchemy.engine import Connection, RowMapping
from sqlalchemy.sql import ColumnElement, FromClause, Select
from sqlalchemy.sql.selectable import CompoundSelect

from dataitem.core.config import AppConfig
from dataitem.core.logging import color_palette, log
from dataitem.core.models.items import DataItem, DimensionItemType
from dataitem.core.query.builder import QueryBuilder
from dataitem.core.query.params import DISPLAY_NAME_ORDER, validate_params
from dataitem.db.schema import Entity


class DataItemQuery(ABC):
    """
    Search strategy for one kind of data item.

    Subclasses describe their columns, joins and filters; statement
    assembly, sharing, locale fallback, ordering and counting are shared.
    """

    kind: DimensionItemType
    entity: Entity
    # Result columns that make the ordering total.
    tiebreak: Sequence[str] = ("uid",)

    def __init__(self, connection: Connection, config: Optional[AppConfig] = None):
        self.connection = connection
        self.config = config or AppConfig()

    # ===== Strategy hooks =====

    @abstractmethod
    def columns(self, builder: QueryBuilder, display_name: ColumnElement) -> Sequence[ColumnElement]:
        """Labeled select list; must include `uid`, `name` and `display_name`."""

    @abstractmethod
    def to_item(self, row: RowMapping) -> DataItem:
        """Map one result row to a DataItem."""

    def from_clause(self) -> FromClause:
        return self.entity.table

    def conditions(self, builder: QueryBuilder) -> List[Optional[ColumnElement]]:
        table = self.entity.table
        return [
            builder.sharing(),
            builder.name_filter(table.c.name),
            builder.uid_filter(table.c.uid),
        ]

    def display_match(self, builder: QueryBuilder):
        return None

    def order_columns(self, items: FromClause, order_key: str) -> Sequence[ColumnElement]:
        if order_key == DISPLAY_NAME_ORDER:
            return [items.c.display_name]
        return [items.c.name]

    def skip(self, params: Mapping[str, Any]) -> bool:
        """True when the parameters rule this kind out without querying."""
        return False

    # ===== Shared operations =====

    def statement(self, params: Optional[Mapping[str, Any]]) -> Select | CompoundSelect:
        builder = QueryBuilder(self.entity, params)
        return builder.localized(
            lambda display_name: self.columns(builder, display_name),
            self.from_clause(),
            self.conditions(builder),
            self.display_match(builder),
        )

    def find(self, params: Optional[Mapping[str, Any]]) -> List[DataItem]:
        validate_params(params)
        if self.skip(params or {}):
            return []

        builder = QueryBuilder(self.entity, params)
        query = builder.ordered(
            self.statement(params), self.order_columns, self.config.max_limit, self.tiebreak
        )
        items = [self.to_item(row) for row in self.connection.execute(query).mappings()]

        log.debug(f"Found {color_palette['count'](len(items))} {color_palette['kind'](self.kind.value)} items")
        return items

    def count(self, params: Optional[Mapping[str, Any]]) -> int:
        validate_params(params)
        if self.skip(params or {}):
            return 0

        builder = QueryBuilder(self.entity, params)
        return self.connection.execute(builder.counted(self.statement(params))).scalar_one()

    @property
    def associated_entity(self) -> str:
        return self.entity.name
