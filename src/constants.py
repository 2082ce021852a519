#!/usr/bin/env python3
"""
Constants for Build Baron ticket filing
"""

# JIRA project that build failure tickets are filed under
BF_PROJECT_KEY = "BF"

# Custom JIRA field listing the tasks a ticket covers
FAILING_TASKS_FIELD = "customfield_12950"

BUILD_FAILURE_ISSUE_TYPE = "Build Failure"

# Base URL used for task and history links
UI_ROOT = "https://evergreen.mongodb.com"

# Above this many failing tests the summary is collapsed
MAX_SUMMARY_TESTS = 4

# One line per failing test, substituted into DESCRIPTION_TEMPLATE's {tests}
TEST_LINE_TEMPLATE = "*{test.name}* - [Logs|{test.url}] | [History|{test.history_url}]\n\n"

DESCRIPTION_TEMPLATE = """
h2. [{task.display_name} failed on {task.build_variant}|{ui_root}/task/{task.id}]

{tests}



~BF Ticket Generated by [~{user_id}]~
"""
