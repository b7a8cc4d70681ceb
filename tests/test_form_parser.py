import pytest

from fantrax_setup.errors import FormStateParseError
from fantrax_setup.models.enums import ParseStage
from fantrax_setup.parsing.form_parser import extract_form_fields


def test_hidden_fields_in_page_order(setup_html):
    fields = extract_form_fields(setup_html)
    assert fields.hidden_fields == {
        "leagueId": "L123",
        "h2hConfigChangesMade": "n",
        "season": "2025",
        "emptyValue": "",
        "commissionerNote": "Play nice",
        "startDate": "2025-10-07",
        "endDate": "2026-04-16",
        "allowTrades": "true",
        "showStandings": "yes",
    }


def test_underscore_prefixed_hidden_fields_are_checkbox_shadows(setup_html):
    fields = extract_form_fields(setup_html)
    assert fields.checkbox_fields == {"_allowTrades": "on"}
    assert "_allowTrades" not in fields.hidden_fields


def test_all_selected_option_notations(setup_html):
    fields = extract_form_fields(setup_html)
    assert fields.select_fields == {
        "scoringPeriod": "DAILY",
        "playoffTeams": "6",
        "draftType": "OFFLINE",
    }


def test_only_allow_listed_text_inputs_are_kept(setup_html):
    fields = extract_form_fields(setup_html)
    assert "leagueName" not in fields.hidden_fields
    assert not any(name.startswith("divisionName") for name in fields.hidden_fields)


def test_unchecked_checkboxes_are_ignored(setup_html):
    assert "publicLeague" not in extract_form_fields(setup_html).hidden_fields


def test_values_or_names_with_quotes_are_dropped(setup_html):
    fields = extract_form_fields(setup_html)
    assert "note" not in fields.hidden_fields
    every_name = [*fields.hidden_fields, *fields.select_fields, *fields.checkbox_fields]
    assert all("'" not in name for name in every_name)
    assert all("'" not in value for value in fields.hidden_fields.values())


def test_quoted_select_and_checkbox_values_are_dropped():
    html = """
    <input type="hidden" name="keep" value="1">
    <select name="pick"><option value="it's" selected>x</option></select>
    <input type="checkbox" name="flag" value="a'b" checked>
    """
    fields = extract_form_fields(html)
    assert fields.select_fields == {}
    assert fields.hidden_fields == {"keep": "1"}


def test_later_duplicates_overwrite_but_keep_position():
    html = """
    <input type="hidden" name="a" value="1">
    <input type="hidden" name="b" value="2">
    <input type="hidden" name="a" value="3">
    """
    fields = extract_form_fields(html)
    assert list(fields.hidden_fields.items()) == [("a", "3"), ("b", "2")]


def test_page_without_hidden_inputs_is_fatal():
    with pytest.raises(FormStateParseError) as exc_info:
        extract_form_fields('<form><input type="text" name="username"></form>')
    assert exc_info.value.stage is ParseStage.FORM_STATE


def test_entity_encoded_values_are_decoded():
    html = """
    <input type="hidden" name="leagueName" value="Bits &amp; Pieces">
    <input type="text" name="startDate" value="2025&#45;10&#45;07">
    <select name="tier"><option value="A&amp;B" selected>A&amp;B</option></select>
    """
    fields = extract_form_fields(html)
    assert fields.hidden_fields["leagueName"] == "Bits & Pieces"
    assert fields.hidden_fields["startDate"] == "2025-10-07"
    assert fields.select_fields == {"tier": "A&B"}


def test_angle_bracket_inside_value_does_not_end_the_tag():
    html = '<input type="hidden" name="rule" value="a > b" data-x="1">'
    assert extract_form_fields(html).hidden_fields == {"rule": "a > b"}


def test_single_quoted_and_uppercase_attributes():
    html = """
    <INPUT TYPE='hidden' NAME='leagueId' VALUE='L9'>
    <input type='checkbox' name='allowTrades' value='true' checked>
    <select name='size'><option value='10' selected>10</option></select>
    """
    fields = extract_form_fields(html)
    assert fields.hidden_fields == {"leagueId": "L9", "allowTrades": "true"}
    assert fields.select_fields == {"size": "10"}


def test_checkbox_whose_value_is_checked_is_still_unchecked():
    html = """
    <input type="hidden" name="leagueId" value="L1">
    <input type="checkbox" name="tradeReview" value="checked">
    <input type="checkbox" name="waivers" value="selected">
    """
    assert extract_form_fields(html).hidden_fields == {"leagueId": "L1"}


def test_option_without_value_submits_its_text():
    html = """
    <input type="hidden" name="leagueId" value="L1">
    <select name="scoring"><option>Points</option><option selected> Roto </option></select>
    """
    assert extract_form_fields(html).select_fields == {"scoring": "Roto"}
