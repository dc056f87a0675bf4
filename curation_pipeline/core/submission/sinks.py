"""
Submission Sinks
Backends that receive {sheetName, entries} and answer with a SinkResponse.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd
import requests

from ..config.app_config import AppConfig
from ..errors import SubmissionError
from .models import ENTRY_COLUMNS, STATUS_SUCCESS, SinkResponse, SubmissionEntry

logger = logging.getLogger(__name__)


class SubmissionSink(ABC):
    """Append-only destination for submissions."""

    @abstractmethod
    def send(self, sheet_name: str, entries: Sequence[SubmissionEntry]) -> SinkResponse:
        raise NotImplementedError


class HttpSheetSink(SubmissionSink):
    """
    Posts the batch as JSON to a web endpoint (e.g. a spreadsheet web app)
    and trusts its reply.
    """

    def __init__(self, url: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()

    def send(self, sheet_name: str, entries: Sequence[SubmissionEntry]) -> SinkResponse:
        payload = {"sheetName": sheet_name, "entries": [e.to_dict() for e in entries]}

        try:
            resp = self._session.post(self._url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error(f"Submission request to sink failed: {e}")
            raise SubmissionError(f"Sink unreachable: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.ok:
            message = body.get("message") if isinstance(body, dict) else None
            logger.error(f"Sink answered HTTP {resp.status_code}: {message or resp.text[:200]}")
            raise SubmissionError(f"Sink answered HTTP {resp.status_code}", sink_message=message or "")

        try:
            return SinkResponse.from_payload(body)
        except ValueError as e:
            logger.error(f"Unexpected sink response: {e}")
            raise SubmissionError(f"Malformed sink response: {e}") from e


class CsvSheetSink(SubmissionSink):
    """
    Appends entries to one CSV file per sheet name under a local directory.
    """

    def __init__(self, sheets_dir: Path):
        self._dir = Path(sheets_dir)

    def sheet_path(self, sheet_name: str) -> Path:
        safe = re.sub(r'[\\/:*?"<>|\x00-\x1f]+', "_", sheet_name).strip(" .") or "sheet"
        return self._dir / f"{safe}.csv"

    def send(self, sheet_name: str, entries: Sequence[SubmissionEntry]) -> SinkResponse:
        output_path = self.sheet_path(sheet_name)
        df = pd.DataFrame([e.to_dict() for e in entries], columns=ENTRY_COLUMNS)

        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            df.to_csv(
                output_path,
                mode='a',
                header=not output_path.exists(),
                index=False,
                encoding='utf-8'
            )
        except OSError as e:
            logger.error(f"Could not append to {output_path}: {e}")
            raise SubmissionError(f"CSV write failed: {e}", sink_message="could not write sheet file") from e

        logger.info(f"Appended {len(df)} rows to {output_path}")
        return SinkResponse(
            status=STATUS_SUCCESS,
            message=f"{len(df)} rows appended",
            data={"rows": len(df), "path": str(output_path)}
        )


def build_sink(config: AppConfig, sheets_dir: Path) -> SubmissionSink:
    """Selects the sink configured by sink.mode."""
    if config.sink_mode == "csv":
        return CsvSheetSink(sheets_dir)
    return HttpSheetSink(config.sink_url, timeout=config.sink_timeout)
