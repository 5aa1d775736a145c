# tests/parsers/test_technical_extractor.py
import pytest

from carimport.infrastructure.parsers.extractors.technical import (
    details_from_pairs,
    extract_technical,
    label_value_pairs,
    parse_mileage,
    parse_power,
    parse_year,
)


# ──────────────────────────────────────────────────────────────────────────────
#                          🔢 Парсери окремих значень
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "text, expected",
    [
        ("110 kW (150 PS)", 150),
        ("147 kW", 200),
        ("Leistung: 85kW", 116),
        ("Akku 64 kWh", None),
        ("0 PS", None),
        ("", None),
    ],
)
def test_parse_power(text, expected):
    assert parse_power(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123.456 km", 123456),
        ("Kilometerstand 5 km", 5),
        ("Höchstgeschwindigkeit 250 km/h", None),
    ],
)
def test_parse_mileage(text, expected):
    assert parse_mileage(text) == expected


def test_parse_year_skips_out_of_range_tokens():
    assert parse_year("Oldtimer von 1975, EZ 03/2018") == 2018
    assert parse_year("Baujahr 1975") is None
    assert parse_year("Erstzulassung 2031") is None


# ──────────────────────────────────────────────────────────────────────────────
#                       📋 Структурований список → поля
# ──────────────────────────────────────────────────────────────────────────────

_TECH_HTML = """
<div class="TechnicalData">
  <div><span>Kilometerstand</span><span>123.456 km</span></div>
  <div><span>Leistung</span><span>147 kW (200 PS)</span></div>
  <div><span>Kraftstoff</span><span>Diesel</span></div>
  <div><span>Getriebe</span><span>Automatik</span></div>
  <div><span>Erstzulassung</span><span>03/2019</span></div>
</div>
"""


def test_structured_list_tier(make_doc):
    details = extract_technical(make_doc(_TECH_HTML))

    assert details.mileage == 123456
    assert details.power == 200
    assert details.fuel_type == "Diesel"
    assert details.transmission == "Automatik"
    assert details.model_year == 2019


def test_laufleistung_is_mileage_not_power():
    details = details_from_pairs([("laufleistung", "80.000 km"), ("leistung", "100 kW")])

    assert details.mileage == 80000
    assert details.power == 136


def test_consumption_row_does_not_hide_fuel_row(make_doc):
    doc = make_doc(
        "<dl><dt>Kraftstoffverbrauch</dt><dd>1,5 l/100km</dd>"
        "<dt>Kraftstoff</dt><dd>Hybrid (Benzin/Elektro)</dd></dl>"
    )

    assert extract_technical(doc).fuel_type == "Hybrid"


def test_later_fuel_row_replaces_unknown_value():
    details = details_from_pairs([("kraftstoffart", "k. A."), ("kraftstoff", "Elektro")])

    assert details.fuel_type == "Electric"


def test_dl_pairs_are_read(make_doc):
    doc = make_doc("<dl><dt>Kraftstoff</dt><dd>Benzin</dd><dt>Erstzulassung</dt><dd>2016</dd></dl>")

    pairs = label_value_pairs(doc, row_selectors=[])

    assert pairs == [("kraftstoff", "Benzin"), ("erstzulassung", "2016")]


def test_full_text_tier_fills_gaps(make_doc):
    doc = make_doc(
        "<div class='TechnicalData'><div><span>Kraftstoff</span><span>Elektro</span></div></div>"
        "<p>Gepflegtes Fahrzeug, 45.000 km, 150 kW, EZ 2021</p>"
        "<script>var year = 1999; var km = '999 km';</script>"
    )

    details = extract_technical(doc)

    assert details.fuel_type == "Electric"
    assert details.mileage == 45000
    assert details.power == 204
    assert details.model_year == 2021


def test_nothing_found_leaves_fields_undefined(make_doc):
    details = extract_technical(make_doc("<p>Kontaktieren Sie uns</p>"))

    assert details.power is None
    assert details.mileage is None
    assert details.model_year is None
    assert details.fuel_type is None
