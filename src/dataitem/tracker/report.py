# src/dataitem/tracker/report.py
"""Job report returned once a tracker import job has finished."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Status(str, Enum):
    OK = "OK"
    WARNING = "WARNING"
    ERROR = "ERROR"


class Stats(ReportModel):
    created: int = 0
    updated: int = 0
    deleted: int = 0
    ignored: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated + self.deleted + self.ignored

    def merge(self, other: "Stats") -> "Stats":
        return Stats(
            created=self.created + other.created,
            updated=self.updated + other.updated,
            deleted=self.deleted + other.deleted,
            ignored=self.ignored + other.ignored,
        )


class ErrorReport(ReportModel):
    message: str
    error_code: Optional[str] = None
    main_id: Optional[str] = None


class ObjectReport(ReportModel):
    uid: str
    index: Optional[int] = None
    error_reports: List[ErrorReport] = Field(default_factory=list)


class TypeReport(ReportModel):
    tracker_type: str
    stats: Stats = Field(default_factory=Stats)
    object_reports: List[ObjectReport] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(report.error_reports for report in self.object_reports)


class BundleReport(ReportModel):
    type_report_map: Dict[str, TypeReport] = Field(default_factory=dict)


class ImportReport(ReportModel):
    status: Status = Status.OK
    stats: Stats = Field(default_factory=Stats)
    bundle_report: BundleReport = Field(default_factory=BundleReport)
    message: Optional[str] = None

    @classmethod
    def from_type_reports(cls, type_reports: List[TypeReport]) -> "ImportReport":
        """
        Sum the per-type stats and derive the overall status.

        Errors with nothing created or updated is ERROR, errors next to
        successful objects is WARNING, anything else is OK. The first error
        message becomes the report message.
        """
        stats = Stats()
        for report in type_reports:
            stats = stats.merge(report.stats)

        errors = [
            error
            for report in type_reports
            for obj in report.object_reports
            for error in obj.error_reports
        ]
        if not errors:
            status = Status.OK
        elif stats.created + stats.updated + stats.deleted == 0:
            status = Status.ERROR
        else:
            status = Status.WARNING

        return cls(
            status=status,
            stats=stats,
            bundle_report=BundleReport(
                type_report_map={report.tracker_type: report for report in type_reports}
            ),
            message=errors[0].message if errors else None,
        )

    def uids(self, tracker_type: str) -> List[str]:
        report = self.bundle_report.type_report_map.get(tracker_type)
        return [obj.uid for obj in report.object_reports] if report else []
