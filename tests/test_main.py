#!/usr/bin/env python3
"""
Tests for Build Baron ticket filing
"""

import json
import tempfile
import unittest
from unittest.mock import Mock, patch
import os
import sys

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from main import BuildBaron, main, parse_file_ticket_input
from errors import (
    NotAuthenticatedError,
    RenderError,
    TaskLookupError,
    TaskNotFoundError,
    TicketSubmissionError,
)
from models import TaskRecord, TestResult, TicketResult


class TestParseFileTicketInput(unittest.TestCase):

    def test_json_string(self):
        task_id, test_ids = parse_file_ticket_input('{"task": "123", "tests": ["a.js", "b.js"]}')
        self.assertEqual(task_id, "123")
        self.assertEqual(test_ids, ["a.js", "b.js"])

    def test_missing_tests(self):
        self.assertEqual(parse_file_ticket_input({"task": "123"}), ("123", []))


class TestBuildBaron(unittest.TestCase):
    """Test the ticket filing flow"""

    def setUp(self):
        self.env_vars = {
            "INPUT_JIRA_HOST": "https://jira.example.com",
            "INPUT_JIRA_USERNAME": "bot",
            "INPUT_JIRA_PASSWORD": "secret",
            "INPUT_EVERGREEN_API_ROOT": "https://evergreen.example.com",
        }
        self.env_patcher = patch.dict(os.environ, self.env_vars)
        self.env_patcher.start()

        self.baron = BuildBaron()
        self.baron.evergreen = Mock()
        self.baron.jira = Mock()

        self.task = TaskRecord(
            id="123",
            display_name="T",
            build_variant="V",
            project="P",
            test_results=[
                TestResult("dir/foo.js", "u1"),
                TestResult("bar.js", "u2"),
            ],
        )
        self.baron.evergreen.find_task.return_value = self.task
        self.baron.jira.create_ticket.return_value = TicketResult(key="BF-1")

    def tearDown(self):
        self.env_patcher.stop()

    def test_missing_jira_config(self):
        with patch.dict(os.environ, {"INPUT_JIRA_HOST": ""}):
            with self.assertRaises(ValueError):
                BuildBaron()

    def test_file_ticket(self):
        result = self.baron.file_ticket("jdoe", "123", ["bar.js", "dir/foo.js"])

        self.assertEqual(result.key, "BF-1")
        self.baron.evergreen.find_task.assert_called_once_with("123")
        self.baron.jira.create_ticket.assert_called_once()
        request = self.baron.jira.create_ticket.call_args[0][0]
        self.assertEqual(request["summary"], "foo.js, bar.js")
        self.assertEqual(request["customfield_12950"], ["T"])
        self.assertEqual(request["assignee"], {"name": "jdoe"})
        description = request["description"]
        self.assertLess(description.index("*foo.js*"), description.index("*bar.js*"))
        self.assertIn("/task_history/P/T/foo.js#foo.js=fail", description)

    def test_not_authenticated(self):
        with self.assertRaises(NotAuthenticatedError) as ctx:
            self.baron.file_ticket("", "123", ["bar.js"])

        self.assertEqual(ctx.exception.status_code, 401)
        self.baron.evergreen.find_task.assert_not_called()
        self.baron.jira.create_ticket.assert_not_called()

    def test_task_not_found(self):
        self.baron.evergreen.find_task.return_value = None

        with self.assertRaises(TaskNotFoundError) as ctx:
            self.baron.file_ticket("jdoe", "missing", [])

        self.assertEqual(ctx.exception.status_code, 404)
        self.assertIn("task not found for id missing", str(ctx.exception))
        self.baron.jira.create_ticket.assert_not_called()

    def test_lookup_failure(self):
        self.baron.evergreen.find_task.side_effect = TaskLookupError("db down")

        with self.assertRaises(TaskLookupError) as ctx:
            self.baron.file_ticket("jdoe", "123", [])
        self.assertEqual(ctx.exception.status_code, 500)
        self.baron.jira.create_ticket.assert_not_called()

    def test_render_failure_never_submits(self):
        with patch("main.build_ticket_request", side_effect=RenderError("bad field")):
            with self.assertRaises(RenderError) as ctx:
                self.baron.file_ticket("jdoe", "123", ["bar.js"])

        self.assertEqual(ctx.exception.status_code, 400)
        self.baron.jira.create_ticket.assert_not_called()

    def test_submission_failure(self):
        self.baron.jira.create_ticket.side_effect = TicketSubmissionError("rejected")

        with self.assertRaises(TicketSubmissionError) as ctx:
            self.baron.file_ticket("jdoe", "123", ["bar.js"])

        self.assertIn("rejected", str(ctx.exception))
        self.baron.jira.create_ticket.assert_called_once()

    def test_read_request_from_inputs(self):
        with patch.dict(os.environ, {"INPUT_TASK_ID": "123", "INPUT_TEST_IDS": "a.js, dir/b.js"}):
            self.assertEqual(self.baron.read_request(), ("123", ["a.js", "dir/b.js"]))

        with patch.dict(os.environ, {"INPUT_TASK_ID": "123", "INPUT_TEST_IDS": '["a,1.js"]'}):
            self.assertEqual(self.baron.read_request(), ("123", ["a,1.js"]))

    def test_read_request_from_file(self):
        with tempfile.NamedTemporaryFile("w", suffix=".json", delete=False) as f:
            json.dump({"task": "123", "tests": ["bar.js"]}, f)
        self.addCleanup(os.remove, f.name)

        with patch.dict(os.environ, {"INPUT_REQUEST_PATH": f.name}):
            self.assertEqual(self.baron.read_request(), ("123", ["bar.js"]))

    def test_run(self):
        with patch.dict(os.environ, {"INPUT_USER": "jdoe", "INPUT_TASK_ID": "123", "INPUT_TEST_IDS": "bar.js"}):
            result = self.baron.run()

        self.assertEqual(result.key, "BF-1")
        request = self.baron.jira.create_ticket.call_args[0][0]
        self.assertEqual(request["summary"], "bar.js")


class TestMain(unittest.TestCase):

    @patch("main.BuildBaron")
    def test_main_exits_on_error(self, mock_baron):
        mock_baron.return_value.run.side_effect = TaskNotFoundError("123")

        with self.assertRaises(SystemExit) as ctx:
            main()
        self.assertEqual(ctx.exception.code, 1)

    @patch("main.BuildBaron")
    def test_main_success(self, mock_baron):
        mock_baron.return_value.run.return_value = TicketResult(key="BF-7")

        main()

        mock_baron.return_value.run.assert_called_once()


if __name__ == "__main__":
    unittest.main()
