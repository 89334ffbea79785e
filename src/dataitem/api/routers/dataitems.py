# src/dataitem/api/routers/dataitems.py
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Query
from sqlalchemy.engine import Connection

from dataitem.core.config import AppConfig
from dataitem.core.logging import color_palette, log
from dataitem.core.query.filters import parse_filters
from dataitem.core.query.order import check_compatibility, parse_order
from dataitem.core.query.params import build_params, target_kinds
from dataitem.queries.service import DataItemPage, DataItemService


class DataItemRouter:
    """Generates the data item search route."""

    def __init__(
        self,
        app: FastAPI,
        db_dependency: Callable[..., Connection],
        config: AppConfig,
    ):
        self.app = app
        self.db_dependency = db_dependency
        self.config = config
        self.router = APIRouter(tags=["Data Items"])

    def generate_routes(self) -> None:
        @self.router.get(
            "/dataItems",
            response_model=DataItemPage,
            response_model_exclude_none=True,
            summary="Search data items usable as analytics dimensions",
        )
        def get_data_items(
            filter: List[str] = Query(default=[]),
            order: List[str] = Query(default=[]),
            paging: bool = True,
            page: int = Query(default=1, ge=1),
            page_size: Optional[int] = Query(default=None, ge=1, alias="pageSize"),
            locale: Optional[str] = None,
            user_id_param: Optional[str] = Query(default=None, alias="userId"),
            user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
            db: Connection = Depends(self.db_dependency),
        ) -> DataItemPage:
            filters = parse_filters(set(filter))
            orders = parse_order(set(order))
            check_compatibility(orders, filters)

            kinds = target_kinds(filters)
            params = build_params(filters, orders, user_id=user_id or user_id_param, locale=locale)
            log.debug(
                f"filters={color_palette['filter'](sorted(map(str, filters)))} "
                f"order={color_palette['order'](sorted(map(str, orders)))}"
            )

            service = DataItemService(db, self.config)
            if paging:
                return service.page(kinds, params, page, page_size)
            return DataItemPage(data_items=service.find(kinds, params))

        self.app.include_router(self.router)
        log.success("Generated data item routes")
