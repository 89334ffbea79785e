# src/dataitem/queries/program_indicator.py
from sqlalchemy.engine import RowMapping

from dataitem.core.models.items import DataItem, DimensionItemType, ValueType
from dataitem.core.query.params import skip_value_type
from dataitem.db.schema import program, programindicator
from dataitem.queries.base import DataItemQuery


class ProgramIndicatorQuery(DataItemQuery):
    kind = DimensionItemType.PROGRAM_INDICATOR
    entity = programindicator

    def skip(self, params) -> bool:
        return skip_value_type(ValueType.NUMBER, params)

    def from_clause(self):
        return self.entity.table.join(
            program.table, program.pk == self.entity.table.c.programid
        )

    def conditions(self, builder):
        return super().conditions(builder) + [builder.program_filter(program.table.c.uid)]

    def columns(self, builder, display_name):
        table = self.entity.table
        return [
            table.c.uid.label("uid"),
            table.c.name.label("name"),
            table.c.code.label("code"),
            program.table.c.uid.label("program_uid"),
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
            program_id=row["program_uid"],
        )
