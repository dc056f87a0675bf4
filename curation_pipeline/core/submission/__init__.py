"""
Submission module
"""

from .models import SinkResponse, SubmissionEntry, SubmissionResult
from .sinks import CsvSheetSink, HttpSheetSink, SubmissionSink, build_sink
from .submission_pipeline import SubmissionPipeline

__all__ = [
    "CsvSheetSink",
    "HttpSheetSink",
    "SinkResponse",
    "SubmissionEntry",
    "SubmissionPipeline",
    "SubmissionResult",
    "SubmissionSink",
    "build_sink",
]
