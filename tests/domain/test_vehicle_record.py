# tests/domain/test_vehicle_record.py
import pytest

from carimport.domain.vehicles.entities import (
    PLACEHOLDER_IMAGE,
    FuelType,
    Url,
    VehicleRecord,
    fuel_from_text,
    normalize_fuel_type,
)


def _record(**overrides):
    data = dict(title="BMW 320d Touring", price=15900, source_url="https://suchen.mobile.de/x")
    data.update(overrides)
    return VehicleRecord(**data)


def test_sentinels_and_placeholder_by_default():
    record = _record()

    assert (record.power, record.mileage, record.model_year) == (0, 0, 0)
    assert record.fuel_type == "" and record.transmission == ""
    assert record.images == (PLACEHOLDER_IMAGE,)


def test_images_deduplicated_and_capped():
    urls = [f"https://img.mobile.de/l/{i}.jpg" for i in range(12)]
    record = _record(images=[urls[0], urls[0], *urls])

    assert len(record.images) == 10
    assert record.images[0] == urls[0]
    assert len(set(record.images)) == 10


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": "   "},
        {"price": 0},
        {"fuel_type": "Kerosin"},
    ],
)
def test_invalid_records_rejected(overrides):
    with pytest.raises(ValueError):
        _record(**overrides)


def test_to_dict_uses_camel_case():
    payload = _record(power=150, model_year=2019, fuel_type="Diesel").to_dict()

    assert payload["modelYear"] == 2019
    assert payload["fuelType"] == "Diesel"
    assert payload["sourceUrl"] == "https://suchen.mobile.de/x"
    assert set(payload) >= {"recordId", "generatedAt", "title", "price", "images", "power", "mileage"}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Benzin", "Gasoline"),
        ("Diesel, Automatik", "Diesel"),
        ("Hybrid (Benzin/Elektro)", "Hybrid"),
        ("Autogas (LPG)", "LPG"),
        ("https://schema.org/Diesel", "Diesel"),
        ("Wasserstoff", None),
        ("", None),
    ],
)
def test_normalize_fuel_type(raw, expected):
    assert normalize_fuel_type(raw) == expected


def test_fuel_from_text_first_keyword_wins():
    assert fuel_from_text("Kraftstoff: Diesel\nKein Benzin") == FuelType.GASOLINE.value
    assert fuel_from_text("nichts") is None


def test_url_value_object():
    assert str(Url(" https://mobile.de/a ")) == "https://mobile.de/a"
    with pytest.raises(ValueError):
        Url("mobile.de/a")
