#!/usr/bin/env python3
"""
Builds the content of a build failure ticket from a task's test results
"""

from typing import Any, Dict, Iterable, List

from constants import (
    BF_PROJECT_KEY,
    BUILD_FAILURE_ISSUE_TYPE,
    DESCRIPTION_TEMPLATE,
    FAILING_TASKS_FIELD,
    MAX_SUMMARY_TESTS,
    TEST_LINE_TEMPLATE,
    UI_ROOT,
)
from errors import RenderError
from models import FailureDetail, TaskRecord


def clean_test_name(path: str) -> str:
    """Return the last non-empty segment of a slash or backslash delimited test path.

    Forward slashes are checked first, so a name like "dir/sub\\test.js" keeps
    its backslash: "sub\\test.js".
    """
    while path:
        idx = path.rfind("/")
        if idx == -1:
            idx = path.rfind("\\")
        if idx == -1:
            return path
        if idx != len(path) - 1:
            return path[idx + 1:]
        # trailing separator, drop it and look again
        path = path[:-1]
    return path


def history_url(task: TaskRecord, test_name: str) -> str:
    """Link to the failure history of a test within the task's project"""
    return f"{UI_ROOT}/task_history/{task.project}/{task.display_name}/{test_name}#{test_name}=fail"


def get_summary(task_name: str, tests: List[FailureDetail]) -> str:
    """One-line ticket title for the given failures"""
    if len(tests) == 0:
        # most likely a compile or setup failure
        return f"{task_name} failure"
    if len(tests) > MAX_SUMMARY_TESTS:
        return f"{task_name} failures"
    return ", ".join(test.name for test in tests)


def get_description(task: TaskRecord, user_id: str, tests: List[FailureDetail]) -> str:
    """Render the JIRA markup description of the ticket"""
    try:
        test_lines = "".join(TEST_LINE_TEMPLATE.format(test=test) for test in tests)
        return DESCRIPTION_TEMPLATE.format(
            task=task,
            user_id=user_id,
            tests=test_lines,
            ui_root=UI_ROOT,
        )
    except (KeyError, AttributeError, IndexError, ValueError) as e:
        raise RenderError(e) from e


def build_failure_details(task: TaskRecord, test_ids: Iterable[str]) -> List[FailureDetail]:
    """Failure details for the selected tests, in the task's own result order.

    Selected ids that the task has no result for are ignored.
    """
    selected = set(test_ids)
    tests = []
    for result in task.test_results:
        if result.test_file in selected:
            name = clean_test_name(result.test_file)
            tests.append(FailureDetail(
                name=name,
                url=result.url,
                history_url=history_url(task, name),
            ))
    return tests


def build_ticket_request(task: TaskRecord, user_id: str, tests: List[FailureDetail]) -> Dict[str, Any]:
    """Lay out the JIRA issue fields for a build failure ticket"""
    description = get_description(task, user_id, tests)
    return {
        "project": {"key": BF_PROJECT_KEY},
        "summary": get_summary(task.display_name, tests),
        FAILING_TASKS_FIELD: [task.display_name],
        "issuetype": {"name": BUILD_FAILURE_ISSUE_TYPE},
        "assignee": {"name": user_id},
        "reporter": {"name": user_id},
        "description": description,
    }
