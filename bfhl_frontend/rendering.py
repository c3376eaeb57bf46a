"""HTML for the form page, built from a ``FormState`` snapshot."""
from html import escape
from typing import Any, List, Tuple

from bfhl_frontend.schemas import FILTER_OPTIONS, FormState

PLACEHOLDER = 'Enter JSON, e.g. { "data": ["A","C","z"] }'

# Summary rows, in display order: (response field, label)
SUMMARY_ROWS: List[Tuple[str, str]] = [
    ("numbers", "Numbers"),
    ("alphabets", "Alphabets"),
    ("highest_alphabet", "Highest Alphabet"),
]

PAGE_STYLE = """
body { min-height: 100vh; background-color: #f5f5f5; padding: 2rem; font-family: Arial, sans-serif; margin: 0; }
.container { max-width: 800px; margin: 0 auto; }
.card { background-color: white; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); margin-bottom: 2rem; padding: 1.5rem; }
h1 { color: #2563eb; font-size: 1.5rem; font-weight: bold; margin-bottom: 1.5rem; }
h2 { font-size: 1.25rem; font-weight: 600; color: #1f2937; margin-bottom: 1rem; }
h3 { font-size: 1rem; font-weight: 500; color: #1f2937; margin-bottom: 0.75rem; }
label { display: block; margin-bottom: 0.5rem; font-size: 0.875rem; font-weight: 500; color: #374151; }
textarea { width: 100%; min-height: 120px; padding: 0.75rem; border-radius: 6px; border: 1px solid #d1d5db;
  margin-bottom: 1rem; font-size: 0.875rem; resize: vertical; box-sizing: border-box; }
.submit { width: 100%; background-color: #2563eb; color: white; padding: 0.75rem; border-radius: 6px; border: none;
  cursor: pointer; font-size: 0.875rem; font-weight: 500; }
.submit:disabled { cursor: not-allowed; opacity: 0.7; }
.error { background-color: #fef2f2; border-left: 4px solid #ef4444; padding: 1rem; margin-top: 1rem;
  border-radius: 4px; color: #b91c1c; }
.filters { display: flex; flex-wrap: wrap; gap: 0.5rem; margin-bottom: 1.5rem; }
.filters form { margin: 0; }
.chip { background-color: #f3f4f6; color: #374151; padding: 0.5rem 1rem; border-radius: 9999px; border: none;
  cursor: pointer; font-size: 0.875rem; }
.chip.selected { background-color: #bfdbfe; color: #1e40af; }
.summary { background-color: #f9fafb; padding: 1rem; border-radius: 6px; }
.summary div { margin-bottom: 0.5rem; }
.summary span { font-weight: 500; }
"""

# Disables the button while the browser waits for the redirect.
SUBMIT_SCRIPT = (
    "var b=this.querySelector('button[type=submit]');"
    "b.disabled=true;b.textContent='Processing...';"
)


def is_displayable(value: Any) -> bool:
    """Empty strings, zero, ``False`` and ``None`` are not shown."""
    if value is None or value is False:
        return False
    if isinstance(value, (str, int, float)) and not value:
        return False
    return True


def format_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return str(value)


def _render_error(state: FormState) -> str:
    if not state.error:
        return ""
    return f'<div class="error" role="alert">{escape(state.error)}</div>'


def _render_filters(state: FormState) -> str:
    chips = []
    for option in FILTER_OPTIONS:
        selected = option in state.selected_filters
        css = "chip selected" if selected else "chip"
        mark = " <span>×</span>" if selected else ""
        chips.append(
            f'<form method="post" action="/filters/{option.value}">'
            f'<button type="submit" class="{css}" aria-pressed="{str(selected).lower()}">'
            f"{option.value}{mark}</button></form>"
        )
    return '<div class="filters">' + "".join(chips) + "</div>"


def _render_summary(state: FormState) -> str:
    if not state.filtered_response:
        return ""
    rows = []
    for field, label in SUMMARY_ROWS:
        value = state.filtered_response.get(field)
        if is_displayable(value):
            rows.append(f"<div><span>{label}: </span>{escape(format_value(value))}</div>")
    return '<div class="summary"><h3>Filtered Response</h3>' + "".join(rows) + "</div>"


def _render_results(state: FormState) -> str:
    if state.response is None or state.error:
        return ""
    return (
        '<div class="card results"><h2>Filter Results</h2>'
        + _render_filters(state)
        + _render_summary(state)
        + "</div>"
    )


def render_page(state: FormState, title: str = "BFHL Data Processor") -> str:
    disabled = " disabled" if state.is_loading else ""
    button_label = "Processing..." if state.is_loading else "Process Data"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{escape(title)}</title>
<style>{PAGE_STYLE}</style>
</head>
<body>
<div class="container">
<div class="card">
<h1>{escape(title)}</h1>
<form method="post" action="/submit" onsubmit="{SUBMIT_SCRIPT}">
<label for="json_input">JSON Input</label>
<textarea id="json_input" name="json_input" placeholder="{escape(PLACEHOLDER)}">{escape(state.raw_input)}</textarea>
<button type="submit" class="submit"{disabled}>{button_label}</button>
</form>
{_render_error(state)}
</div>
{_render_results(state)}
</div>
</body>
</html>
"""
