"""One search strategy per data item kind, plus the service merging them."""

from dataitem.queries.base import DataItemQuery
from dataitem.queries.data_element import DataElementQuery
from dataitem.queries.data_set import DataSetQuery
from dataitem.queries.indicator import IndicatorQuery
from dataitem.queries.program_data_element import ProgramDataElementQuery
from dataitem.queries.program_indicator import ProgramIndicatorQuery
from dataitem.queries.service import DataItemPage, DataItemService, Pager

__all__ = [
    "DataItemQuery",
    "DataElementQuery",
    "DataSetQuery",
    "IndicatorQuery",
    "ProgramIndicatorQuery",
    "ProgramDataElementQuery",
    "DataItemService",
    "DataItemPage",
    "Pager",
]
