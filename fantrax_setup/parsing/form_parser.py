"""Form field scans of the league setup page (BeautifulSoup)."""

from typing import Dict, Iterator, Optional

from bs4 import BeautifulSoup
from loguru import logger

from fantrax_setup.errors import FormStateParseError
from fantrax_setup.models.form_state import FormFields
from fantrax_setup.utils.misc_utils import looks_like_script_fragment

# Only these text inputs reach the server; the rest are cosmetic
ALLOWED_TEXT_FIELDS = ("startDate", "endDate")

CHECKBOX_SHADOW_PREFIX = "_"


class _FieldCollector:
    """Accumulates fields for one extraction, applying the quote filter."""

    def __init__(self) -> None:
        self.hidden: Dict[str, str] = {}
        self.selects: Dict[str, str] = {}
        self.checkboxes: Dict[str, str] = {}
        self.skipped = 0

    def accept(self, bucket: Dict[str, str], name: str, value: str, kind: str) -> None:
        if looks_like_script_fragment(name, value):
            self.skipped += 1
            logger.debug(f"Skipping {kind} field {name!r}: looks like a script template")
            return
        bucket[name] = value


def _inputs(soup: BeautifulSoup, input_type: str) -> Iterator:
    yield from soup.find_all(
        "input", attrs={"type": lambda t: t is not None and t.lower() == input_type}
    )


def _selected_option_value(select) -> Optional[str]:
    # selected="selected", a bare selected, and selected before value all parse alike
    option = select.find("option", selected=True)
    if option is None:
        return None
    value = option.get("value")
    return value if value is not None else option.get_text(strip=True)


def _scan_hidden(soup: BeautifulSoup, fields: _FieldCollector) -> int:
    seen = 0
    for tag in _inputs(soup, "hidden"):
        name = tag.get("name")
        if not name:
            continue
        seen += 1
        value = tag.get("value") or ""
        if name.startswith(CHECKBOX_SHADOW_PREFIX):
            fields.accept(fields.checkboxes, name, value, "checkbox shadow")
        else:
            fields.accept(fields.hidden, name, value, "hidden")
    return seen


def _scan_selects(soup: BeautifulSoup, fields: _FieldCollector) -> None:
    for select in soup.find_all("select"):
        name = select.get("name")
        if not name:
            continue
        value = _selected_option_value(select)
        if value is None:
            logger.debug(f"Select {name!r} has no selected option; omitted")
            continue
        fields.accept(fields.selects, name, value, "select")


def _scan_text_inputs(soup: BeautifulSoup, fields: _FieldCollector) -> None:
    for tag in _inputs(soup, "text"):
        name = tag.get("name")
        value = tag.get("value")
        if name in ALLOWED_TEXT_FIELDS and value is not None:
            fields.accept(fields.hidden, name, value, "text")


def _scan_checked_checkboxes(soup: BeautifulSoup, fields: _FieldCollector) -> None:
    for tag in _inputs(soup, "checkbox"):
        if not tag.has_attr("checked"):
            continue
        name = tag.get("name")
        value = tag.get("value")
        if name and value is not None:
            fields.accept(fields.hidden, name, value, "checkbox")


def extract_form_fields(html: str) -> FormFields:
    """Collects every hidden, select, checkbox and allow-listed text value.

    Names or values containing a single quote are dropped as script template
    leakage. A real value with a quote in it would be dropped too; that is
    a known limitation of scraping an undocumented page, so each drop is
    logged.
    """
    soup = BeautifulSoup(html, "html.parser")
    fields = _FieldCollector()

    if _scan_hidden(soup, fields) == 0:
        logger.error("No hidden inputs found; this is not the league setup form")
        raise FormStateParseError("no hidden input fields found in HTML")

    _scan_selects(soup, fields)
    _scan_text_inputs(soup, fields)
    _scan_checked_checkboxes(soup, fields)

    if fields.skipped:
        logger.info(f"Dropped {fields.skipped} form fields that looked like script templates")
    logger.debug(
        f"Parsed form state: {len(fields.hidden)} hidden, {len(fields.selects)} select, "
        f"{len(fields.checkboxes)} checkbox shadow fields"
    )
    return FormFields(
        hidden_fields=fields.hidden,
        select_fields=fields.selects,
        checkbox_fields=fields.checkboxes,
    )
