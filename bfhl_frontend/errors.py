"""Failures raised while submitting a form.

The controller converts every one of these into the user-visible error
message; ``str(exc)`` is exactly what the page shows.
"""

DATA_ARRAY_REQUIRED = "JSON must have a 'data' key with an array value."


class SubmissionError(Exception):
    """Base class for everything that can go wrong in a submission."""


class MalformedJSONError(SubmissionError):
    def __init__(self, detail: str):
        super().__init__(f"Invalid JSON syntax: {detail}")
        self.detail = detail


class MissingDataArrayError(SubmissionError):
    def __init__(self):
        super().__init__(DATA_ARRAY_REQUIRED)


class NetworkOrServerError(SubmissionError):
    """Transport failure reaching the processing endpoint."""


class ServerError(NetworkOrServerError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Server Error: {body}")
        self.status_code = status_code
        self.body = body


class InvalidServerResponseError(NetworkOrServerError):
    """The endpoint answered 2xx but the body is not JSON."""

    def __init__(self, detail: str):
        super().__init__(f"Invalid response from server: {detail}")
        self.detail = detail
