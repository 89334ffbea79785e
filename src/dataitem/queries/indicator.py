# src/dataitem/queries/indicator.py
from sqlalchemy.engine import RowMapping

from dataitem.core.models.items import DataItem, DimensionItemType, ValueType
from dataitem.core.query.params import skip_value_type
from dataitem.db.schema import indicator
from dataitem.queries.base import DataItemQuery


class IndicatorQuery(DataItemQuery):
    kind = DimensionItemType.INDICATOR
    entity = indicator

    def skip(self, params) -> bool:
        # Indicators have no value type of their own but always evaluate to
        # numbers, so any value type filter without NUMBER excludes them.
        return skip_value_type(ValueType.NUMBER, params)

    def columns(self, builder, display_name):
        table = self.entity.table
        return [
            table.c.uid.label("uid"),
            table.c.name.label("name"),
            table.c.code.label("code"),
            display_name.label("display_name"),
        ]

    def to_item(self, row: RowMapping) -> DataItem:
        name = (row["name"] or "").strip() or None
        display_name = (row["display_name"] or "").strip() or name
        return DataItem(
            id=row["uid"],
            name=name,
            display_name=display_name,
            code=row["code"],
            value_type=ValueType.NUMBER,
            simplified_value_type=ValueType.NUMBER,
            dimension_item_type=self.kind,
        )
