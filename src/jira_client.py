#!/usr/bin/env python3
"""
JIRA client for filing tickets
"""

import requests
from requests.auth import HTTPBasicAuth

from errors import TicketSubmissionError
from models import TicketResult


class JiraClient:
    """Client for the JIRA issue REST API"""

    def __init__(self, host: str, username: str, password: str):
        self.host = host.rstrip("/")
        self.username = username
        self.password = password

    def create_ticket(self, fields: dict) -> TicketResult:
        """Create an issue with the given fields"""
        try:
            response = requests.post(
                url=f"{self.host}/rest/api/latest/issue",
                auth=HTTPBasicAuth(self.username, self.password),
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                json={"fields": fields},
                timeout=60
            )
        except requests.RequestException as e:
            raise TicketSubmissionError(e) from e

        if response.status_code not in (200, 201):
            raise TicketSubmissionError(
                f"HTTP request returned unexpected status {response.status_code}: {self._error_detail(response)}"
            )

        result = response.json()
        return TicketResult(
            key=result.get("key", ""),
            id=result.get("id", ""),
            url=result.get("self", ""),
        )

    def _error_detail(self, response) -> str:
        """Collect the error messages JIRA sends back with a rejected request"""
        try:
            data = response.json()
        except ValueError:
            return response.text

        if not isinstance(data, dict):
            return response.text
        messages = list(data.get("errorMessages") or [])
        for field_name, message in (data.get("errors") or {}).items():
            messages.append(f"{field_name}: {message}")
        return "; ".join(messages) if messages else response.text
