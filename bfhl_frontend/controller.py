"""Form state and the parse → validate → submit → filter flow.

One ``FormController`` backs one browser session. All state lives on the
instance; the filtered view is rebuilt after every change to the response or
to the filter selection.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from bfhl_frontend.errors import MalformedJSONError, MissingDataArrayError, SubmissionError
from bfhl_frontend.schemas import FIELD_BY_TAG, FormState, FilterTag, ParsedRequest
from bfhl_frontend.services import bfhl_client
from bfhl_frontend.utils.text import replace_lone_surrogates

logger = logging.getLogger("bfhl_frontend.controller")


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON
    raise MalformedJSONError(f"unexpected token {name}")


def parse_input(raw_input: str) -> Any:
    try:
        return json.loads(raw_input, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise MalformedJSONError(f"{exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
    except RecursionError as exc:
        raise MalformedJSONError("nesting is too deep") from exc


def validate_request(parsed: Any) -> ParsedRequest:
    if not isinstance(parsed, dict):
        raise MissingDataArrayError()
    try:
        return ParsedRequest.model_validate(parsed)
    except ValidationError as exc:
        raise MissingDataArrayError() from exc


def build_filtered_view(response: Optional[Dict[str, Any]], selected: List[FilterTag]) -> Dict[str, Any]:
    """Copy the selected fields out of ``response``; absent fields are omitted."""
    filtered: Dict[str, Any] = {}
    if not response:
        return filtered
    for tag in selected:
        field = FIELD_BY_TAG[tag]
        if field in response:
            filtered[field] = response[field]
    return filtered


class FormController:
    def __init__(self) -> None:
        self.raw_input: str = ""
        self.error: str = ""
        self.is_loading: bool = False
        self.response: Optional[Dict[str, Any]] = None
        self.selected_filters: List[FilterTag] = []
        self.filtered_response: Dict[str, Any] = {}
        self._submission_seq = 0

    def update_input(self, text: str) -> None:
        self.raw_input = replace_lone_surrogates(text)
        self.error = ""

    async def submit(self) -> None:
        self._submission_seq += 1
        seq = self._submission_seq
        raw_input = self.raw_input
        self.is_loading = True
        try:
            validate_request(parse_input(raw_input))
            payload = await bfhl_client.post_bfhl(raw_input)
        except SubmissionError as exc:
            if self._is_stale(seq):
                logger.info("Discarding failure of superseded submission #%d: %s", seq, exc)
                return
            logger.info("Submission #%d failed: %s", seq, exc)
            self.error = str(exc)
            self._set_response(None)
        except Exception as exc:
            if self._is_stale(seq):
                logger.exception("Superseded submission #%d failed unexpectedly", seq)
                return
            logger.exception("Submission #%d failed unexpectedly", seq)
            self.error = str(exc) or exc.__class__.__name__
            self._set_response(None)
        else:
            if self._is_stale(seq):
                logger.info("Discarding response of superseded submission #%d", seq)
                return
            self.error = ""
            self.selected_filters = []
            self._set_response(payload)
            logger.info("Submission #%d succeeded with fields %s", seq, sorted(payload))
        finally:
            if not self._is_stale(seq):
                self.is_loading = False

    def toggle_filter(self, tag: Union[FilterTag, str]) -> None:
        try:
            tag = FilterTag(tag)
        except ValueError:
            logger.warning("Ignoring unknown filter tag %r", tag)
            return
        if tag in self.selected_filters:
            self.selected_filters = [t for t in self.selected_filters if t is not tag]
        else:
            self.selected_filters = [*self.selected_filters, tag]
        self._recompute()

    def snapshot(self) -> FormState:
        return FormState(
            raw_input=self.raw_input,
            error=self.error,
            is_loading=self.is_loading,
            response=self.response,
            selected_filters=list(self.selected_filters),
            filtered_response=dict(self.filtered_response),
        )

    def _is_stale(self, seq: int) -> bool:
        return seq != self._submission_seq

    def _set_response(self, response: Optional[Dict[str, Any]]) -> None:
        self.response = response
        self._recompute()

    def _recompute(self) -> None:
        self.filtered_response = build_filtered_view(self.response, self.selected_filters)
