# tests/parsers/test_title_price_extractors.py
from carimport.infrastructure.parsers.extractors.price import extract_price
from carimport.infrastructure.parsers.extractors.title import extract_title


# ──────────────────────────────────────────────────────────────────────────────
#                               🏷️ Заголовок
# ──────────────────────────────────────────────────────────────────────────────

def test_title_prefers_ad_title_testid(make_doc):
    doc = make_doc(
        '<h1>Suchergebnisse</h1>'
        '<div data-testid="ad-title">  Volkswagen   Golf 1.5 TSI </div>'
    )
    assert extract_title(doc) == "Volkswagen Golf 1.5 TSI"


def test_title_falls_through_empty_candidates(make_doc):
    doc = make_doc('<div data-testid="ad-title">  </div><h1 class="MainHeading">Audi A4 Avant</h1>')
    assert extract_title(doc) == "Audi A4 Avant"


def test_title_bold_subheading_is_last_resort(make_doc):
    doc = make_doc('<h2 class="bold-title">Opel Astra K</h2>')
    assert extract_title(doc) == "Opel Astra K"


def test_title_missing(make_doc):
    assert extract_title(make_doc("<p>nichts</p>")) is None


def test_title_custom_selectors(make_doc):
    doc = make_doc('<span class="x">Skoda Octavia</span><h1>Andere</h1>')
    assert extract_title(doc, selectors=["span.x"]) == "Skoda Octavia"


# ──────────────────────────────────────────────────────────────────────────────
#                                 💰 Ціна
# ──────────────────────────────────────────────────────────────────────────────

def test_price_strips_everything_but_digits(make_doc):
    doc = make_doc('<div class="MainPriceInfo">15.900 €</div>')
    assert extract_price(doc) == 15900


def test_price_skips_elements_without_digits(make_doc):
    doc = make_doc(
        '<span class="price-label">Preis auf Anfrage</span>'
        '<span class="price-value">22.490 € Brutto</span>'
    )
    assert extract_price(doc) == 22490


def test_price_selector_order(make_doc):
    doc = make_doc(
        '<span class="price">99</span>'
        '<div data-testid="prime-price">18.750 €</div>'
    )
    assert extract_price(doc) == 18750


def test_price_zero_is_not_a_price(make_doc):
    assert extract_price(make_doc('<div class="price">0 €</div>')) is None
    assert extract_price(make_doc("<p>kein Preis</p>")) is None
