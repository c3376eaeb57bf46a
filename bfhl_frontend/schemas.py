from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilterTag(str, Enum):
    """Display toggles offered once a response is available."""
    NUMBERS = "Numbers"
    ALPHABETS = "Alphabets"
    HIGHEST_ALPHABET = "HighestAlphabet"


# Display order of the toggle buttons.
FILTER_OPTIONS: List[FilterTag] = [FilterTag.NUMBERS, FilterTag.ALPHABETS, FilterTag.HIGHEST_ALPHABET]

# Response field copied into the filtered view for each tag.
FIELD_BY_TAG: Dict[FilterTag, str] = {
    FilterTag.ALPHABETS: "alphabets",
    FilterTag.NUMBERS: "numbers",
    FilterTag.HIGHEST_ALPHABET: "highest_alphabet",
}


class ParsedRequest(BaseModel):
    """Minimal shape the endpoint accepts: an object with a ``data`` array."""
    model_config = ConfigDict(extra="allow")

    data: List[Any]


class InputUpdate(BaseModel):
    text: str


class FormState(BaseModel):
    """Snapshot of a form controller, as returned by the JSON API."""
    raw_input: str = ""
    error: str = ""
    is_loading: bool = False
    response: Optional[Dict[str, Any]] = None
    selected_filters: List[FilterTag] = Field(default_factory=list)
    filtered_response: Dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
