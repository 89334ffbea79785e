# src/dataitem/queries/data_element.py
from sqlalchemy.engine import RowMapping

from dataitem.core.models.items import DataItem, DimensionItemType, ValueType
from dataitem.db.schema import dataelement
from dataitem.queries.base import DataItemQuery


class DataElementQuery(DataItemQuery):
    kind = DimensionItemType.DATA_ELEMENT
    entity = dataelement

    def columns(self, builder, display_name):
        table = self.entity.table
        return [
            table.c.uid.label("uid"),
            table.c.name.label("name"),
            table.c.code.label("code"),
            table.c.valuetype.label("value_type"),
            display_name.label("display_name"),
        ]

    def conditions(self, builder):
        return super().conditions(builder) + [
            builder.value_type_filter(self.entity.table.c.valuetype)
        ]

    def to_item(self, row: RowMapping) -> DataItem:
        value_type = ValueType(row["value_type"])
        return DataItem(
            id=row["uid"],
            name=row["name"],
            display_name=row["display_name"] or row["name"],
            code=row["code"],
            value_type=value_type,
            simplified_value_type=value_type.simplified(),
            dimension_item_type=self.kind,
        )
