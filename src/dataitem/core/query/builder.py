# src/dataitem/core/query/builder.py
"""
Composable SQL fragments shared by every data item query.

Queries are assembled from predicate lists instead of concatenated strings.
The locale fallback is built here once and parameterized by `Entity`.
"""

from typing import Any, Callable, List, Mapping, Optional, Sequence

from sqlalchemy import and_, exists, func, or_, select
from sqlalchemy.sql import ColumnElement, FromClause, Select
from sqlalchemy.sql.selectable import CompoundSelect

from dataitem.core.query.operators import Direction
from dataitem.core.query.params import (
    DISPLAY_NAME,
    DISPLAY_NAME_ORDER,
    LIKE_ESCAPE,
    LOCALE,
    MAX_LIMIT,
    NAME,
    NAME_ORDER,
    PROGRAM_ID,
    UID,
    USER_ID,
    VALUE_TYPES,
    has_string_presence,
)
from dataitem.db.schema import Entity, usergroupmembers

# Translation property holding an object's name.
NAME_PROPERTY = "NAME"

# Metadata read (`r%`) or data read (`__r%`) access strings.
READ_PATTERNS = ("r%", "__r%")

Columns = Callable[[ColumnElement], Sequence[ColumnElement]]
DisplayMatch = Callable[[ColumnElement, str], ColumnElement]


def _readable(access: ColumnElement) -> ColumnElement:
    return or_(*[access.like(pattern) for pattern in READ_PATTERNS])


def ilike(column: ColumnElement, pattern: str) -> ColumnElement:
    return column.ilike(pattern, escape=LIKE_ESCAPE)


def translated_name(entity: Entity, locale: Optional[str]) -> ColumnElement:
    """Scalar name of `entity` in `locale`, falling back to the raw name."""
    if not locale:
        return entity.table.c.name
    t = entity.translations
    value = (
        select(t.c.value)
        .where(
            t.c[entity.owner] == entity.pk,
            t.c.locale == locale,
            t.c.property == NAME_PROPERTY,
        )
        .scalar_subquery()
    )
    return func.coalesce(value, entity.table.c.name)


class QueryBuilder:
    """
    Builds filtered and sorted statements for one entity from the parameter bag.
    """

    def __init__(self, entity: Entity, params: Optional[Mapping[str, Any]]):
        self.entity = entity
        self.params = params or {}

    @property
    def locale(self) -> Optional[str]:
        return self.params[LOCALE] if has_string_presence(self.params, LOCALE) else None

    # ===== Sharing =====

    def public_read(self, entity: Optional[Entity] = None) -> ColumnElement:
        access = (entity or self.entity).table.c.publicaccess
        return or_(_readable(access), access.is_(None))

    def user_read(self, entity: Optional[Entity] = None) -> Optional[ColumnElement]:
        entity = entity or self.entity
        if not has_string_presence(self.params, USER_ID):
            return None
        ua = entity.user_accesses
        granted = select(ua.c[entity.owner]).where(
            ua.c.userid == self.params[USER_ID], _readable(ua.c.access)
        )
        return entity.pk.in_(granted)

    def group_read(self, entity: Optional[Entity] = None) -> Optional[ColumnElement]:
        entity = entity or self.entity
        if not has_string_presence(self.params, USER_ID):
            return None
        ga = entity.group_accesses
        groups = select(usergroupmembers.c.usergroupid).where(
            usergroupmembers.c.userid == self.params[USER_ID]
        )
        granted = select(ga.c[entity.owner]).where(
            ga.c.usergroupid.in_(groups), _readable(ga.c.access)
        )
        return entity.pk.in_(granted)

    def sharing(self, entity: Optional[Entity] = None) -> ColumnElement:
        """Visible if public, or granted to the user, or to one of their groups."""
        grants = [c for c in (self.user_read(entity), self.group_read(entity)) if c is not None]
        return or_(self.public_read(entity), *grants)

    # ===== Filtering =====

    def name_filter(self, *columns: ColumnElement) -> Optional[ColumnElement]:
        if not has_string_presence(self.params, NAME):
            return None
        return or_(*[ilike(column, self.params[NAME]) for column in columns])

    def uid_filter(self, column: ColumnElement) -> Optional[ColumnElement]:
        if not has_string_presence(self.params, UID):
            return None
        return column == self.params[UID]

    def program_filter(self, column: ColumnElement) -> Optional[ColumnElement]:
        if not has_string_presence(self.params, PROGRAM_ID):
            return None
        return column == self.params[PROGRAM_ID]

    def value_type_filter(self, column: ColumnElement) -> Optional[ColumnElement]:
        if VALUE_TYPES not in self.params:
            return None
        return column.in_(sorted(self.params[VALUE_TYPES]))

    # ===== Locale fallback =====

    def localized(
        self,
        columns: Columns,
        from_clause: FromClause,
        conditions: List[Optional[ColumnElement]],
        display_match: Optional[DisplayMatch] = None,
    ) -> Select | CompoundSelect:
        """
        Select rows with their display name resolved for the request locale.

        Without a locale the display name is the raw name. With one, the
        result is the union of three disjoint row sets: rows translated in
        the locale, rows with translations but none in the locale, and rows
        without any translation. The last two fall back to the raw name.
        """
        entity = self.entity
        where = [c for c in conditions if c is not None]
        pattern = self.params[DISPLAY_NAME] if has_string_presence(self.params, DISPLAY_NAME) else None
        match = display_match or ilike

        def matching(display: ColumnElement) -> List[ColumnElement]:
            return [match(display, pattern)] if pattern is not None else []

        name = entity.table.c.name
        locale = self.locale
        if locale is None:
            return select(*columns(name)).select_from(from_clause).where(*where, *matching(name))

        t = entity.translations
        owned = t.c[entity.owner] == entity.pk
        in_locale = and_(owned, t.c.locale == locale, t.c.property == NAME_PROPERTY)

        translated = (
            select(*columns(t.c.value))
            .select_from(from_clause.join(t, in_locale))
            .where(*where, *matching(t.c.value))
        )
        missing_locale = (
            select(*columns(name))
            .select_from(from_clause)
            .where(*where, exists().where(owned), ~exists().where(in_locale), *matching(name))
        )
        untranslated = (
            select(*columns(name))
            .select_from(from_clause)
            .where(*where, ~exists().where(owned), *matching(name))
        )
        return translated.union_all(missing_locale, untranslated)

    # ===== Ordering and limits =====

    def limit(self, max_limit: int) -> int:
        requested = self.params.get(MAX_LIMIT)
        return min(requested, max_limit) if requested else max_limit

    def ordered(
        self,
        statement: Select | CompoundSelect,
        order_columns: Callable[[FromClause, str], Sequence[ColumnElement]],
        max_limit: int,
        tiebreak: Sequence[str] = ("uid",),
    ) -> Select:
        """Wrap `statement`, order it by name or display name, then by `tiebreak`."""
        items = statement.subquery("items")
        ordering: List[ColumnElement] = []
        for key in (DISPLAY_NAME_ORDER, NAME_ORDER):
            if has_string_presence(self.params, key):
                direction = Direction.lookup(self.params[key])
                for column in order_columns(items, key):
                    ordering.append(column.desc() if direction == Direction.DESC else column.asc())
                break
        ordering.extend(items.c[name].asc() for name in tiebreak)
        return select(items).order_by(*ordering).limit(self.limit(max_limit))

    def counted(self, statement: Select | CompoundSelect) -> Select:
        return select(func.count()).select_from(statement.subquery("items"))

