"""
Summarizer Exceptions
Failures of the report summarization edge function
"""

from typing import Optional


class SummarizerError(Exception):
    """Base exception for summarizer calls"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class SummarizerCallError(SummarizerError):
    """Raised when the call does not complete with a 2xx status"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, original_error=original_error)
        self.status_code = status_code


class SummarizerResponseError(SummarizerError):
    """Raised when a 2xx body is not a valid report"""
