import dataclasses

from app.services import locale_formats
from app.services.locale_formats import LOCALE_FORMATS, LocaleFormat, get_locale_format, resolve_locale
from app.services import pricing


def test_supported_locales():
    assert set(locale_formats.supported_locales()) == {"en", "th"}


def test_resolve_locale_normalizes_codes():
    assert resolve_locale("TH") == "th"
    assert resolve_locale("th_TH") == "th"
    assert resolve_locale("en-US") == "en"
    assert resolve_locale("") == "en"
    assert resolve_locale(None) == "en"
    assert resolve_locale("de") == "en"


def test_every_row_fills_every_field():
    for code, fmt in LOCALE_FORMATS.items():
        assert fmt.code == code
        for f in dataclasses.fields(LocaleFormat):
            value = getattr(fmt, f.name)
            assert value not in ("", None, (), {}), f"{code}.{f.name} is empty"


def test_unit_lookup_passes_unknown_keys_through():
    th = get_locale_format("th")
    assert th.unit("hour") == "ชั่วโมง"
    assert th.unit("set") == "set"


def test_adding_a_locale_row_needs_no_new_code(monkeypatch):
    row = dataclasses.replace(
        LOCALE_FORMATS["en"],
        code="xx",
        price="THB {amount}",
        contact_for_pricing="Ask us",
    )
    monkeypatch.setitem(LOCALE_FORMATS, "xx", row)
    assert pricing.format_price(2500, locale="xx") == "THB 2,500"
    assert pricing.format_hourly_rate(0, locale="xx") == "Ask us"
