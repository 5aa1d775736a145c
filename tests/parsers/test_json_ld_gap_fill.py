# tests/parsers/test_json_ld_gap_fill.py
import json

import pytest

from carimport.infrastructure.parsers.extractors.json_ld import (
    extract_structured,
    fields_from_object,
    parse_block,
)
from carimport.infrastructure.parsers.vehicle_data_extractor import VehicleDataExtractor
from carimport.shared.errors import StructuredDataParseError
from carimport.shared.utils.result import Err, Ok


def _ld(payload) -> str:
    return f'<script type="application/ld+json">{json.dumps(payload)}</script>'


_CAR = {
    "@context": "https://schema.org",
    "@type": "Car",
    "name": "Mercedes-Benz E 220 d",
    "offers": {"@type": "Offer", "price": "31.990", "priceCurrency": "EUR"},
    "vehicleEngine": {"@type": "EngineSpecification", "enginePower": {"value": 143, "unitCode": "KWT"}},
    "mileageFromOdometer": {"@type": "QuantitativeValue", "value": 87000, "unitCode": "KMT"},
    "dateVehicleFirstRegistered": "1975-05-01",
    "fuelType": "Diesel",
    "vehicleTransmission": "Automatik",
}


def test_parse_block_flattens_graph():
    raw = json.dumps({"@graph": [{"@type": "WebPage"}, {"@type": "Car", "name": "X"}]})

    result = parse_block(raw, 0)

    assert isinstance(result, Ok)
    assert [obj.get("@type") for obj in result.value] == [None, "WebPage", "Car"]


def test_parse_block_reports_invalid_json():
    result = parse_block("{not json", 3)

    assert isinstance(result, Err)
    assert isinstance(result.error, StructuredDataParseError)
    assert result.error.index == 3


def test_fields_from_car_object():
    fields = fields_from_object(_CAR)

    assert fields.title == "Mercedes-Benz E 220 d"
    assert fields.price == 31990
    assert fields.power == 194                 # 143 kW → 194 PS
    assert fields.mileage == 87000
    assert fields.model_year == 1975           # рік з JSON-LD не обмежується діапазоном
    assert fields.fuel_type == "Diesel"
    assert fields.transmission == "Automatik"


@pytest.mark.parametrize(
    "price, mileage",
    [
        ("31.990,00", "87.000,0"),          # 🇩🇪 тисячі крапкою, дріб комою
        ("31,990.00", "87,000.5"),          # 🇬🇧 тисячі комою, дріб крапкою
        ("31990.00", "87000"),
    ],
)
def test_decimal_strings_keep_their_magnitude(price, mileage):
    car = {"@type": "Car", "offers": {"price": price}, "mileageFromOdometer": {"value": mileage}}

    fields = fields_from_object(car)

    assert fields.price == 31990
    assert fields.mileage == 87000


def test_aggregate_offer_price():
    car = {"@type": "Vehicle", "offers": {"@type": "AggregateOffer", "offers": [{"price": 0}, {"price": 12500}]}}
    assert fields_from_object(car).price == 12500


def test_broken_block_is_skipped(make_doc, caplog):
    doc = make_doc(
        '<script type="application/ld+json">{oops</script>'
        + _ld({"@type": "Car", "name": "Golf"})
    )

    with caplog.at_level("WARNING"):
        fields = extract_structured(doc)

    assert fields.title == "Golf"
    assert any("PartialParseFailure" in rec.getMessage() for rec in caplog.records)


def test_non_vehicle_objects_are_ignored(make_doc):
    doc = make_doc(_ld({"@type": "Organization", "name": "Autohaus Müller"}))
    assert extract_structured(doc).title is None


def test_structured_data_never_overwrites_dom_values(make_doc):
    doc = make_doc(
        '<h1>BMW 118i</h1><div class="PriceInfo">9.990 €</div>'
        + _ld({"@type": "Car", "name": "Anderer Titel", "offers": {"price": 1}, "fuelType": "Benzin"})
    )

    draft = VehicleDataExtractor(doc).extract()

    assert draft.title == "BMW 118i"
    assert draft.price == 9990
    assert draft.fuel_type == "Gasoline"        # поле було порожнім → заповнено з JSON-LD
