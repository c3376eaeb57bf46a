from bfhl_frontend.rendering import format_value, is_displayable, render_page
from bfhl_frontend.schemas import FilterTag, FormState


def test_format_value_joins_sequences():
    assert format_value(["A", "C", "z"]) == "A, C, z"
    assert format_value([1, 2]) == "1, 2"
    assert format_value("z") == "z"


def test_is_displayable_follows_truthiness():
    assert is_displayable([]) is True
    assert is_displayable("B") is True
    assert is_displayable("") is False
    assert is_displayable(None) is False
    assert is_displayable(0) is False


def test_initial_page_has_form_and_no_results():
    html = render_page(FormState())
    assert "<h1>BFHL Data Processor</h1>" in html
    assert "JSON Input" in html
    assert "Process Data" in html
    assert "Filter Results" not in html
    assert 'class="error"' not in html


def test_loading_disables_submit():
    html = render_page(FormState(is_loading=True))
    assert "Processing..." in html
    assert 'class="submit" disabled' in html


def test_error_is_escaped_and_hides_results():
    state = FormState(error="Server Error: <b>bad</b>", response={"alphabets": ["A"]})
    html = render_page(state)
    assert "Server Error: &lt;b&gt;bad&lt;/b&gt;" in html
    assert "Filter Results" not in html


def test_results_show_selected_fields_in_fixed_order():
    state = FormState(
        response={"alphabets": ["A", "C"], "numbers": ["1", "2"], "highest_alphabet": "C"},
        selected_filters=[FilterTag.HIGHEST_ALPHABET, FilterTag.ALPHABETS, FilterTag.NUMBERS],
        filtered_response={"highest_alphabet": "C", "alphabets": ["A", "C"], "numbers": ["1", "2"]},
    )
    html = render_page(state)
    assert "Filter Results" in html
    assert "Filtered Response" in html
    numbers = html.index("<span>Numbers: </span>1, 2")
    alphabets = html.index("<span>Alphabets: </span>A, C")
    highest = html.index("<span>Highest Alphabet: </span>C")
    assert numbers < alphabets < highest
    assert html.count("×") == 3


def test_empty_selection_hides_summary():
    state = FormState(response={"alphabets": ["A"]})
    html = render_page(state)
    assert "Filter Results" in html
    assert "Filtered Response" not in html
    for option in ("Numbers", "Alphabets", "HighestAlphabet"):
        assert f'action="/filters/{option}"' in html


def test_raw_input_is_kept_in_textarea():
    html = render_page(FormState(raw_input='{"data": ["<x>"]}'))
    assert "{&quot;data&quot;: [&quot;&lt;x&gt;&quot;]}</textarea>" in html
