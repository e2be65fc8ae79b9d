"""Poll loop for long-running analysis operations.

Each round issues one status query. Classification per round:

- HTTP 429 / 5xx: transient, wait and retry (the round is consumed).
- transport error, other non-2xx, empty or non-object JSON body: logged and
  counted; on the last round it becomes the TIMED_OUT reason.
- ``status`` (case-insensitive) ``succeeded`` / ``failed``: terminal, return
  immediately. Anything else, or no status at all: still pending.
"""

import json
from typing import Any

from docingest.analysis.cancellation import CancellationToken
from docingest.analysis.client_base import BaseAnalysisClient
from docingest.analysis.exceptions import (
    AnalysisCancelledError,
    AnalysisError,
    AnalysisResponseError,
)
from docingest.analysis.models import AnalysisJobHandle, AnalysisResult
from docingest.logging.logger import Log

DEFAULT_MAX_ROUNDS = 10
DEFAULT_DELAY_SECONDS = 2.0


def is_transient_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class AnalysisPoller:
    """Queries an analysis job handle until it reaches a terminal state."""

    def __init__(
        self,
        client: BaseAnalysisClient,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        request_timeout_seconds: float = 30.0,
    ) -> None:
        if max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        self._client = client
        self._max_rounds = max_rounds
        self._delay_seconds = delay_seconds
        self._request_timeout_seconds = request_timeout_seconds

    def poll(
        self,
        handle: AnalysisJobHandle,
        cancellation: CancellationToken | None = None,
    ) -> AnalysisResult:
        """Run the poll loop for *handle*.

        Returns:
            AnalysisResult tagged SUCCEEDED, FAILED or TIMED_OUT.

        Raises:
            AnalysisCancelledError: if *cancellation* fires; remaining rounds
                are not issued.
        """
        token = cancellation if cancellation is not None else CancellationToken()
        document = handle.document_name
        last_round_error = ""

        for round_number in range(1, self._max_rounds + 1):
            token.raise_if_cancelled()
            Log.info(
                f"Polling for analysis result, round {round_number}/{self._max_rounds}",
                document=document,
            )
            last_round_error = ""
            try:
                body = self._fetch(handle, token)
            except AnalysisCancelledError:
                raise
            except AnalysisError as exc:
                last_round_error = str(exc)
                Log.error(
                    f"Error during poll round {round_number}: {exc}",
                    document=document,
                    stage="poll",
                )
            else:
                if body is None:
                    last_round_error = "transient service error"
                else:
                    result = self._classify(body, round_number, document)
                    if result is not None:
                        return result

            if round_number < self._max_rounds:
                Log.debug(
                    f"Waiting {self._delay_seconds}s before next round",
                    document=document,
                )
                token.wait(self._delay_seconds)

        reason = f"Document analysis did not complete within {self._max_rounds} rounds"
        if last_round_error:
            reason = f"{reason}: {last_round_error}"
        Log.error(reason, document=document, stage="poll")
        return AnalysisResult.timed_out(reason, rounds=self._max_rounds)

    def _fetch(
        self,
        handle: AnalysisJobHandle,
        token: CancellationToken,
    ) -> dict[str, Any] | None:
        """Return the parsed status document, or None for a transient answer."""
        response = self._client.get_operation(
            handle.operation_url,
            timeout=token.clip(self._request_timeout_seconds),
        )
        status_code = response.status_code
        Log.debug(f"Received HTTP status code: {status_code}", document=handle.document_name)

        if is_transient_status(status_code):
            Log.warning(
                f"Transient error (HTTP {status_code}). Will retry.",
                document=handle.document_name,
                status_code=status_code,
            )
            return None
        if not 200 <= status_code < 300:
            raise AnalysisResponseError(f"Unexpected HTTP {status_code} from analysis service")
        if not response.body:
            raise AnalysisResponseError("No content returned from service")

        try:
            parsed = json.loads(response.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise AnalysisResponseError(f"Malformed response body: {exc}") from exc
        if not isinstance(parsed, dict):
            raise AnalysisResponseError("Response body must be a JSON object")
        return parsed

    @staticmethod
    def _classify(
        body: dict[str, Any],
        round_number: int,
        document: str,
    ) -> AnalysisResult | None:
        raw_status = body.get("status")
        status = raw_status.lower() if isinstance(raw_status, str) else ""

        if status == "succeeded":
            Log.info("Document analysis succeeded", document=document, rounds=round_number)
            return AnalysisResult.succeeded(body, rounds=round_number)
        if status == "failed":
            reason = _failure_reason(body)
            Log.warning(
                f"Document analysis failed: {reason}",
                document=document,
                rounds=round_number,
            )
            return AnalysisResult.failed(reason, rounds=round_number)

        Log.info(
            f"Analysis not complete yet. Status: {raw_status or 'missing'}",
            document=document,
        )
        return None


def _failure_reason(body: dict[str, Any]) -> str:
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return "Document analysis failed"
