from fantrax_setup.config.settings import settings
from fantrax_setup.logging.setup import MASK, mask_secret, sensitive_data_filter


def test_mask_secret():
    assert mask_secret("FX_RM=abcdef0123456789") == "FX_R****6789"
    assert mask_secret("short") == MASK


def test_sensitive_extra_keys_are_masked():
    record = {"message": "fetching", "extra": {"cookie_header": "FX_RM=abcdef0123456789", "league": "L1"}}
    assert sensitive_data_filter(record) is True
    assert record["extra"]["cookie_header"] == "FX_R****6789"
    assert record["extra"]["league"] == "L1"


def test_configured_cookie_is_scrubbed_from_messages(monkeypatch):
    monkeypatch.setattr(settings, "fantrax_cookies", "FX_RM=supersecretvalue")
    record = {"message": "sent Cookie: FX_RM=supersecretvalue", "extra": {}}
    sensitive_data_filter(record)
    assert record["message"] == f"sent Cookie: {MASK}"
