#!/usr/bin/env python3
"""
Data models for Build Baron
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class TestResult:
    """A single recorded test result of a task"""
    __test__ = False  # not a pytest test class

    test_file: str
    url: str
    status: str = ""


@dataclass
class TaskRecord:
    """Task information needed to file a ticket"""
    id: str
    display_name: str
    build_variant: str
    project: str
    test_results: List[TestResult] = field(default_factory=list)


@dataclass(frozen=True)
class FailureDetail:
    """Container for the fields reported per failing test"""
    name: str
    url: str
    history_url: str


@dataclass
class TicketResult:
    """Ticket returned by JIRA after creation"""
    key: str
    id: str = ""
    url: str = ""  # REST "self" link of the new issue
