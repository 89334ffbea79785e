# src/dataitem/queries/program_data_element.py
from sqlalchemy import and_, exists, or_, true
from sqlalchemy.engine import RowMapping

from dataitem.core.models.items import DataItem, DimensionItemType, ValueType
from dataitem.core.query.builder import ilike, translated_name
from dataitem.core.query.params import DISPLAY_NAME_ORDER, UID, has_string_presence
from dataitem.db.schema import dataelement, program, programstage, programstagedataelement
from dataitem.queries.base import DataItemQuery

ID_SEPARATOR = "."


class ProgramDataElementQuery(DataItemQuery):
    """
    Data elements as captured within a program.

    One row per (program, data element) pair linked through any of the
    program's stages. Names are prefixed by the program name and ids are
    `<program uid>.<data element uid>`.
    """

    kind = DimensionItemType.PROGRAM_DATA_ELEMENT
    entity = dataelement
    tiebreak = ("program_uid", "uid")

    def from_clause(self):
        return self.entity.table.join(program.table, true())

    def _linked(self):
        psde, ps = programstagedataelement, programstage
        return exists().where(
            psde.c.programstageid == ps.c.programstageid,
            ps.c.programid == program.pk,
            psde.c.dataelementid == self.entity.pk,
        )

    def _sharing(self, builder):
        grants = [
            grant
            for grant in (
                builder.user_read(program),
                builder.group_read(program),
                builder.user_read(self.entity),
                builder.group_read(self.entity),
            )
            if grant is not None
        ]
        return or_(and_(builder.public_read(program), builder.public_read(self.entity)), *grants)

    def _uid_filter(self, builder):
        if not has_string_presence(builder.params, UID):
            return None
        uid = builder.params[UID]
        if ID_SEPARATOR in uid:
            program_uid, _, element_uid = uid.partition(ID_SEPARATOR)
            return and_(program.table.c.uid == program_uid, self.entity.table.c.uid == element_uid)
        return self.entity.table.c.uid == uid

    def conditions(self, builder):
        table = self.entity.table
        return [
            self._linked(),
            self._sharing(builder),
            builder.name_filter(program.table.c.name, table.c.name),
            self._uid_filter(builder),
            builder.program_filter(program.table.c.uid),
            builder.value_type_filter(table.c.valuetype),
        ]

    def display_match(self, builder):
        program_display = translated_name(program, builder.locale)
        return lambda display, pattern: or_(ilike(display, pattern), ilike(program_display, pattern))

    def columns(self, builder, display_name):
        table = self.entity.table
        return [
            table.c.uid.label("uid"),
            table.c.name.label("name"),
            table.c.code.label("code"),
            table.c.valuetype.label("value_type"),
            program.table.c.uid.label("program_uid"),
            program.table.c.name.label("program_name"),
            translated_name(program, builder.locale).label("program_display_name"),
            display_name.label("display_name"),
        ]

    def order_columns(self, items, order_key):
        if order_key == DISPLAY_NAME_ORDER:
            return [items.c.program_display_name, items.c.display_name]
        return [items.c.program_name, items.c.name]

    def to_item(self, row: RowMapping) -> DataItem:
        value_type = ValueType(row["value_type"])
        display_name = row["display_name"] or row["name"]
        program_display = row["program_display_name"] or row["program_name"]
        return DataItem(
            id=f"{row['program_uid']}{ID_SEPARATOR}{row['uid']}",
            name=f"{row['program_name']} {row['name']}",
            display_name=f"{program_display} {display_name}",
            code=row["code"],
            value_type=value_type,
            simplified_value_type=value_type.simplified(),
            dimension_item_type=self.kind,
            program_id=row["program_uid"],
        )
