"""Application assembly: FastAPI app, routes and error handlers."""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dataitem.api.routers.dataitems import DataItemRouter
from dataitem.core.config import AppConfig, DbConfig
from dataitem.core.errors import DataItemError
from dataitem.core.logging import log
from dataitem.db.client import DbClient
from dataitem.queries.service import QUERY_CLASSES


class DataItemApi:
    """Builds and configures the data item API."""

    def __init__(self, config: AppConfig, db_client: DbClient, app: Optional[FastAPI] = None):
        self.config = config
        self.db_client = db_client
        self.app = app or FastAPI()
        self._initialize_app()

    def _initialize_app(self) -> None:
        self.app.title = self.config.project_name
        self.app.version = self.config.version
        self.app.description = self.config.description

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def print_welcome(self) -> None:
        self.db_client.test_connection()
        log.info(f"{self.config.project_name} initialized (version {self.config.version})")
        log.table(
            ["Kind", "Table"],
            [[cls.kind.value, cls.entity.name] for cls in QUERY_CLASSES],
        )

    def gen_data_item_routes(self) -> None:
        log.section("Generating Data Item Routes")
        DataItemRouter(self.app, self.db_client.get_db, self.config).generate_routes()

    def configure_error_handlers(self) -> None:
        """Map validation errors to 409 and anything unexpected to 500."""

        @self.app.exception_handler(DataItemError)
        async def data_item_exception_handler(request, exc: DataItemError):
            log.warn(f"Rejected {request.url.path}: {exc.error_code.value} {exc.message}")
            return JSONResponse(status_code=exc.http_status_code, content=exc.to_dict())

        @self.app.exception_handler(Exception)
        async def general_exception_handler(request, exc):
            log.error(f"Unhandled exception: {str(exc)}")
            return JSONResponse(
                status_code=500,
                content={
                    "httpStatus": "Internal Server Error",
                    "httpStatusCode": 500,
                    "status": "ERROR",
                    "message": "Internal server error",
                    "detail": str(exc) if self.config.debug_mode else None,
                },
            )

        log.success("Configured global error handlers")

    def generate_all(self) -> FastAPI:
        self.configure_error_handlers()
        self.gen_data_item_routes()
        return self.app


def create_app(config: Optional[AppConfig] = None, db_client: Optional[DbClient] = None) -> FastAPI:
    """Create the app from explicit settings, or from the environment."""
    config = config or AppConfig.from_env()
    log.set_level(config.log_level)
    db_client = db_client or DbClient(DbConfig.from_env())
    return DataItemApi(config, db_client).generate_all()
