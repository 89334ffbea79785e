# src/dataitem/queries/service.py
"""Dispatches a data item search across the per-kind queries."""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.engine import Connection

from dataitem.core.config import AppConfig
from dataitem.core.logging import color_palette, log
from dataitem.core.models.items import DataItem, DimensionItemType
from dataitem.core.query.params import ALL_KINDS, MAX_LIMIT, validate_params
from dataitem.queries.base import DataItemQuery
from dataitem.queries.data_element import DataElementQuery
from dataitem.queries.data_set import DataSetQuery
from dataitem.queries.indicator import IndicatorQuery
from dataitem.queries.program_data_element import ProgramDataElementQuery
from dataitem.queries.program_indicator import ProgramIndicatorQuery

QUERY_CLASSES = [
    DataElementQuery,
    DataSetQuery,
    IndicatorQuery,
    ProgramIndicatorQuery,
    ProgramDataElementQuery,
]


class Pager(BaseModel):
    page: int
    page_count: int = Field(alias="pageCount")
    total: int
    page_size: int = Field(alias="pageSize")

    model_config = ConfigDict(populate_by_name=True)


class DataItemPage(BaseModel):
    pager: Optional[Pager] = None
    data_items: List[DataItem] = Field(default_factory=list, alias="dataItems")

    model_config = ConfigDict(populate_by_name=True)


class DataItemService:
    """
    Runs the applicable per-kind queries and merges their results.

    Result blocks are concatenated in the fixed order of ALL_KINDS, each
    block keeping the order produced by its own query. Kinds never share
    identifiers, so nothing is deduplicated.
    """

    def __init__(self, connection: Connection, config: Optional[AppConfig] = None):
        self.config = config or AppConfig()
        self.queries: Dict[DimensionItemType, DataItemQuery] = {
            cls.kind: cls(connection, self.config) for cls in QUERY_CLASSES
        }

    def _selected(self, kinds: Optional[Iterable[DimensionItemType]]) -> List[DataItemQuery]:
        wanted = set(kinds) if kinds else set(ALL_KINDS)
        log.debug(
            "Dispatching to "
            + ", ".join(color_palette["kind"](k.value) for k in ALL_KINDS if k in wanted)
        )
        return [self.queries[kind] for kind in ALL_KINDS if kind in wanted]

    def find(
        self,
        kinds: Optional[Iterable[DimensionItemType]],
        params: Optional[Mapping[str, Any]],
    ) -> List[DataItem]:
        items: List[DataItem] = []
        for query in self._selected(kinds):
            items.extend(query.find(params))
        return items

    def count(
        self,
        kinds: Optional[Iterable[DimensionItemType]],
        params: Optional[Mapping[str, Any]],
    ) -> int:
        return sum(query.count(params) for query in self._selected(kinds))

    def page(
        self,
        kinds: Optional[Iterable[DimensionItemType]],
        params: Optional[Mapping[str, Any]],
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> DataItemPage:
        """
        Return one page of the concatenated results.

        Each query only needs to return the first `page * page_size` rows
        for the slice to be exact. No query returns more than the row cap,
        so each count is clamped to it and the total only covers rows that
        some page can reach.
        """
        validate_params(params)
        page = max(page, 1)
        page_size = page_size or self.config.default_page_size

        requested = (params or {}).get(MAX_LIMIT)
        cap = min(requested, self.config.max_limit) if requested else self.config.max_limit
        bounded = dict(params or {})
        bounded[MAX_LIMIT] = min(page * page_size, cap)

        items: List[DataItem] = []
        total = 0
        for query in self._selected(kinds):
            items.extend(query.find(bounded))
            total += min(query.count(params), cap)
        start = (page - 1) * page_size

        return DataItemPage(
            pager=Pager(
                page=page,
                page_count=math.ceil(total / page_size) if total else 0,
                total=total,
                page_size=page_size,
            ),
            data_items=items[start : start + page_size],
        )
