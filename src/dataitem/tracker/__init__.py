"""Tracker event import: work context loading, job reports and polling."""

from dataitem.tracker.client import JobTimeout, TrackerClient
from dataitem.tracker.context import WorkContext, WorkContextLoader
from dataitem.tracker.models import DataValue, Event, ImportOptions, Note
from dataitem.tracker.report import ImportReport, Stats, Status, TypeReport
from dataitem.tracker.uid import UidGenerator

__all__ = [
    "WorkContext",
    "WorkContextLoader",
    "Event",
    "DataValue",
    "Note",
    "ImportOptions",
    "ImportReport",
    "Stats",
    "Status",
    "TypeReport",
    "TrackerClient",
    "JobTimeout",
    "UidGenerator",
]
