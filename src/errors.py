#!/usr/bin/env python3
"""
Errors raised while filing a ticket
"""


class BuildBaronError(Exception):
    """Base error; status_code is the HTTP status reported back to the caller"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotAuthenticatedError(BuildBaronError):
    status_code = 401

    def __init__(self, message: str = "must be logged in to file a ticket"):
        super().__init__(message)


class TaskNotFoundError(BuildBaronError):
    status_code = 404

    def __init__(self, task_id: str):
        super().__init__(f"task not found for id {task_id}")
        self.task_id = task_id


class TaskLookupError(BuildBaronError):
    """The task lookup itself failed"""
    status_code = 500


class RenderError(BuildBaronError):
    """The ticket description template could not be filled in"""
    status_code = 400

    def __init__(self, detail):
        super().__init__(f"error creating description: {detail}")


class TicketSubmissionError(BuildBaronError):
    status_code = 400

    def __init__(self, detail):
        super().__init__(f"error creating JIRA ticket: {detail}")
