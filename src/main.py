#!/usr/bin/env python3
"""
Build Baron - files JIRA build failure tickets for failed Evergreen tasks
"""

import json
import os
import sys
from typing import List, Tuple, Union

from constants import UI_ROOT
from errors import BuildBaronError, NotAuthenticatedError, TaskNotFoundError, TicketSubmissionError
from evergreen_client import EvergreenClient
from jira_client import JiraClient
from models import TicketResult
from ticket_content import build_failure_details, build_ticket_request


def parse_file_ticket_input(payload: Union[str, dict]) -> Tuple[str, List[str]]:
    """Decode a {"task": ..., "tests": [...]} request into a task id and test ids"""
    if isinstance(payload, str):
        payload = json.loads(payload)
    task_id = payload.get("task") or ""
    test_ids = list(payload.get("tests") or [])
    return task_id, test_ids


def _split_test_ids(raw: str) -> List[str]:
    """Test ids given as a JSON list or a comma separated string"""
    raw = raw.strip()
    if not raw:
        return []
    if raw.startswith("["):
        return list(json.loads(raw))
    return [test_id.strip() for test_id in raw.split(",") if test_id.strip()]


class BuildBaron:
    """Main class for filing build failure tickets"""

    def __init__(self):
        self.jira_host = os.getenv("INPUT_JIRA_HOST")
        self.jira_username = os.getenv("INPUT_JIRA_USERNAME")
        self.jira_password = os.getenv("INPUT_JIRA_PASSWORD")

        self.evergreen_api_root = os.getenv("INPUT_EVERGREEN_API_ROOT", UI_ROOT)
        self.evergreen_api_user = os.getenv("INPUT_EVERGREEN_API_USER", "")
        self.evergreen_api_key = os.getenv("INPUT_EVERGREEN_API_KEY", "")

        if not all([self.jira_host, self.jira_username, self.jira_password]):
            raise ValueError("Missing required environment variables")

        # Initialize clients
        self.evergreen = EvergreenClient(self.evergreen_api_root, self.evergreen_api_user, self.evergreen_api_key)
        self.jira = JiraClient(self.jira_host, self.jira_username, self.jira_password)

    def file_ticket(self, user_id: str, task_id: str, test_ids: List[str]) -> TicketResult:
        """File a ticket for the given task, listing the selected failing tests"""
        if not user_id:
            raise NotAuthenticatedError()

        task = self.evergreen.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        tests = build_failure_details(task, test_ids)
        request = build_ticket_request(task, user_id, tests)

        print(f"🎫 Creating JIRA ticket for user {user_id}")
        try:
            result = self.jira.create_ticket(request)
        except TicketSubmissionError as e:
            print(f"❌ {e.message}")
            raise

        print(f"✅ Ticket {result.key} successfully created")
        return result

    def read_request(self) -> Tuple[str, List[str]]:
        """Read the ticket request from INPUT_REQUEST_PATH or the task/test inputs"""
        request_path = os.getenv("INPUT_REQUEST_PATH")
        if request_path:
            with open(request_path, 'r') as f:
                return parse_file_ticket_input(json.load(f))

        task_id = os.getenv("INPUT_TASK_ID", "")
        test_ids = _split_test_ids(os.getenv("INPUT_TEST_IDS", ""))
        return task_id, test_ids

    def run(self) -> TicketResult:
        """Main execution method"""
        user_id = os.getenv("INPUT_USER", "")
        task_id, test_ids = self.read_request()
        print(f"🔍 Filing ticket for task {task_id} ({len(test_ids)} selected test(s))")
        return self.file_ticket(user_id, task_id, test_ids)


def main():
    """Entry point for Build Baron"""
    try:
        baron = BuildBaron()
        result = baron.run()
    except BuildBaronError as e:
        print(f"❌ Build Baron failed ({e.status_code}): {e.message}")
        sys.exit(1)
    except Exception as e:
        print(f"❌ Build Baron failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)

    print(result.key)


if __name__ == "__main__":
    main()
