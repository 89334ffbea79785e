# src/dataitem/queries/data_set.py
from sqlalchemy.engine import RowMapping

from dataitem.core.models.items import DataItem, DimensionItemType
from dataitem.db.schema import dataset
from dataitem.queries.base import DataItemQuery


class DataSetQuery(DataItemQuery):
    """Data sets are addressed through their reporting rates."""

    kind = DimensionItemType.REPORTING_RATE
    entity = dataset

    def columns(self, builder, display_name):
        table = self.entity.table
        return [
            table.c.uid.label("uid"),
            table.c.name.label("name"),
            table.c.code.label("code"),
            display_name.label("display_name"),
        ]

    def to_item(self, row: RowMapping) -> DataItem:
        return DataItem(
            id=row["uid"],
            name=row["name"],
            display_name=row["display_name"] or row["name"],
            code=row["code"],
            dimension_item_type=self.kind,
        )
