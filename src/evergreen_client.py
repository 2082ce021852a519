#!/usr/bin/env python3
"""
Evergreen client utilities
"""

from typing import Optional

import requests

from errors import TaskLookupError
from models import TaskRecord, TestResult


def parse_task(data: dict) -> TaskRecord:
    """Build a TaskRecord from an Evergreen task document"""
    test_results = [
        TestResult(
            test_file=result.get("test_file", ""),
            url=result.get("url", ""),
            status=result.get("status", ""),
        )
        for result in data.get("test_results") or []
    ]
    return TaskRecord(
        id=data.get("id", ""),
        display_name=data.get("display_name", ""),
        build_variant=data.get("build_variant", ""),
        project=data.get("branch") or data.get("project", ""),
        test_results=test_results,
    )


class EvergreenClient:
    def __init__(self, api_root: str, api_user: str = "", api_key: str = ""):
        self.api_root = api_root.rstrip("/")
        self.api_user = api_user
        self.api_key = api_key

    def _create_headers(self) -> dict:
        """Create headers for the HTTP request"""
        headers = {"Accept": "application/json"}
        if self.api_user:
            headers["Api-User"] = self.api_user
        if self.api_key:
            headers["Api-Key"] = self.api_key
        return headers

    def find_task(self, task_id: str) -> Optional[TaskRecord]:
        """Look up a task by id, returning None if it does not exist"""
        url = f"{self.api_root}/rest/v1/tasks/{task_id}"
        try:
            response = requests.get(url, headers=self._create_headers(), timeout=60)
        except requests.RequestException as e:
            raise TaskLookupError(f"error finding task {task_id}: {e}") from e

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise TaskLookupError(
                f"error finding task {task_id} (status: {response.status_code}): {response.text}"
            )

        try:
            return parse_task(response.json())
        except (ValueError, AttributeError) as e:
            raise TaskLookupError(f"invalid task document for {task_id}: {e}") from e
