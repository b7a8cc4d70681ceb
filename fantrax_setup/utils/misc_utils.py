# fantrax_setup/utils/misc_utils.py
from types import MappingProxyType
from typing import Mapping


def freeze_mapping(value: Mapping) -> Mapping:
    """Copies a mapping into a read-only view so snapshots never share storage."""
    return MappingProxyType(dict(value))


def looks_like_script_fragment(*values: str) -> bool:
    """True when any value carries a single quote.

    Inline script on the setup page builds inputs from string templates
    (e.g. name="divisionName_' + tempId + '"). Those templates match the same
    patterns as real fields, and the quote is the only reliable tell.
    """
    return any("'" in value for value in values)


def truncate_snippet(body: bytes, limit: int = 500) -> str:
    """Decodes at most `limit` bytes of a response body for diagnostics."""
    snippet = body[:limit].decode("utf-8", errors="replace")
    if len(body) > limit:
        snippet += "..."
    return snippet
