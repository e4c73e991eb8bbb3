from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

import requests

from ..attendance.model import AttendanceRecord
from ..core.constants import (
    ANALYSIS_EMPTY_MESSAGE,
    ANALYSIS_FAILURE_MESSAGE,
    DEFAULT_ANALYSIS_SAMPLE_LIMIT,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_GEMINI_TIMEOUT_SECONDS,
)
from ..core.exceptions import NarrativeServiceError
from ..sites.model import Site
from ..workers.model import Worker
from .parsing import parse_daily_records
from .prompts import DAILY_RECORDS_SCHEMA, daily_records_prompt, productivity_report_prompt

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiNarrativeService:
    """NarrativeService backed by the Gemini `generateContent` REST endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_GEMINI_MODEL,
        timeout: float = DEFAULT_GEMINI_TIMEOUT_SECONDS,
        sample_limit: int = DEFAULT_ANALYSIS_SAMPLE_LIMIT,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._sample_limit = int(sample_limit)
        self._http = session or requests.Session()

    def _generate(self, prompt: str, *, generation_config: Optional[dict] = None) -> str:
        """Call the model and return the concatenated text of the first candidate.

        Raises NarrativeServiceError on transport errors, non-200 answers and
        unexpected response bodies.
        """
        payload: dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if generation_config:
            payload["generationConfig"] = generation_config

        url = GEMINI_ENDPOINT.format(model=self._model)
        try:
            r = self._http.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self._api_key},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise NarrativeServiceError(f"Gemini request failed: {e}") from e

        if r.status_code != 200:
            raise NarrativeServiceError(f"Gemini answered {r.status_code}: {r.text[:200]}")

        try:
            body = r.json()
            parts = body["candidates"][0]["content"]["parts"]
            return "".join(p.get("text", "") for p in parts)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise NarrativeServiceError(f"Unexpected Gemini response: {e}") from e

    def generate_daily_records(self, workers: Sequence[Worker], site: Site, date: str) -> list[AttendanceRecord]:
        try:
            text = self._generate(
                daily_records_prompt(workers, site, date),
                generation_config={
                    "responseMimeType": "application/json",
                    "responseSchema": DAILY_RECORDS_SCHEMA,
                },
            )
        except NarrativeServiceError:
            logger.exception("Error generating mock data for %s", date)
            return []

        return parse_daily_records(
            text,
            site=site,
            date=date,
            id_prefix=f"gen-{int(time.time() * 1000)}",
            known_worker_ids=[w.id for w in workers],
        )

    def generate_productivity_report(self, records: Sequence[AttendanceRecord], workers: Sequence[Worker]) -> str:
        prompt = productivity_report_prompt(records, workers, sample_limit=self._sample_limit)
        try:
            text = self._generate(prompt)
        except NarrativeServiceError:
            logger.exception("Analysis error")
            return ANALYSIS_FAILURE_MESSAGE
        return text or ANALYSIS_EMPTY_MESSAGE
