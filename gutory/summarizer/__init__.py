"""
Summarizer Integration Module
"""

from gutory.summarizer.client import SummarizerClient, SummarizerResponse, build_request_body
from gutory.summarizer.exceptions import (
    SummarizerCallError,
    SummarizerError,
    SummarizerResponseError,
)

__all__ = [
    "SummarizerClient",
    "SummarizerResponse",
    "build_request_body",
    "SummarizerError",
    "SummarizerCallError",
    "SummarizerResponseError",
]
