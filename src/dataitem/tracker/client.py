# src/dataitem/tracker/client.py
"""HTTP client submitting tracker imports and polling for their job report."""

import time
from typing import Any, Callable, Dict, Optional

import httpx

from dataitem.core.logging import log
from dataitem.tracker.report import ImportReport


class JobTimeout(RuntimeError):
    """The import job did not complete within the polling budget."""


class TrackerClient:
    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        poll_interval: float = 1.0,
        max_attempts: int = 60,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=20)
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.sleep = sleep

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def post(self, payload: Dict[str, Any], params: Optional[Dict[str, Any]] = None) -> str:
        """Submit an import and return the id of the job processing it."""
        response = self.client.post(self._url("/tracker"), json=payload, params=params or {})
        response.raise_for_status()
        return response.json()["response"]["id"]

    def is_completed(self, job_id: str) -> bool:
        response = self.client.get(self._url(f"/tracker/jobs/{job_id}"))
        response.raise_for_status()
        return any(notification.get("completed") for notification in response.json())

    def get_job_report(self, job_id: str, report_mode: str = "FULL") -> ImportReport:
        response = self.client.get(
            self._url(f"/tracker/jobs/{job_id}/report"), params={"reportMode": report_mode}
        )
        response.raise_for_status()
        return ImportReport.model_validate(response.json())

    def wait_for_job(self, job_id: str) -> None:
        for attempt in range(1, self.max_attempts + 1):
            if self.is_completed(job_id):
                log.debug(f"Job {job_id} completed after {attempt} poll(s)")
                return
            self.sleep(self.poll_interval)
        raise JobTimeout(f"Job {job_id} did not complete after {self.max_attempts} polls")

    def post_and_get_job_report(self, payload: Dict[str, Any]) -> ImportReport:
        job_id = self.post(payload)
        self.wait_for_job(job_id)
        return self.get_job_report(job_id)
