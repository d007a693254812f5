from decimal import Decimal

import pytest

from src.processors.product_normalizer import clean_description, normalize, parse_price
from src.utils.config_loader import CatalogSyncConfig, NormalizationConfig


def test_red_mug_example_normalizes_to_documented_shape():
    raw = {"title": "Red Mug", "variants": [{"price": "9.5", "inventory_quantity": 0}], "images": []}

    product = normalize(raw)

    assert product.name == "Red Mug"
    assert product.price == "€9.50"
    assert product.price_amount == Decimal("9.50")
    assert product.currency == "EUR"
    assert product.availability == "out of stock"
    assert product.stock == 0
    assert product.image_url == ""


def test_full_record_maps_every_field(raw_product):
    product = normalize(raw_product())

    assert product.id == "1001"
    assert product.description == "Hand embroidered tote"
    assert product.price == "€19.90"
    assert product.availability == "in stock"
    assert product.stock == 3
    assert product.sku == "TOTE-1"
    assert product.category == "Bags"
    assert product.vendor == "Bastidor Colorido"
    assert product.tags == "linen, tote"
    assert product.image_url == "https://cdn.example.com/tote.jpg"
    assert product.url == "https://bastidorcolorido.pt/products/linen-tote"


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"title": None, "body_html": None, "variants": None, "images": None},
        {"title": "No variants", "variants": [], "images": []},
        {"title": "Junk entries", "variants": ["x", None], "images": [42]},
        {"title": "Bad price", "variants": [{"price": "abc", "inventory_quantity": "many"}]},
        {"title": "Huge price", "variants": [{"price": "1e30", "inventory_quantity": float("-inf")}]},
        {"title": "Infinite stock", "variants": [{"price": "Infinity", "inventory_quantity": float("inf")}]},
    ],
)
def test_normalize_is_total_and_uses_defaults(raw):
    product = normalize(raw)

    assert product.price_amount == Decimal("0.00")
    assert product.stock == 0
    assert product.availability == "out of stock"
    assert product.description == ""
    assert product.image_url == ""
    assert product.category == "Geral"
    assert product.vendor == "Bastidor Colorido"
    assert product.sku == ""


def test_stock_and_availability_stay_consistent(raw_product):
    for quantity in (-2, 0, 1, 50):
        product = normalize(raw_product(variants=[{"price": "1", "inventory_quantity": quantity}]))
        assert (product.stock > 0) == (product.availability == "in stock")
        assert product.stock >= 0


def test_only_first_variant_and_image_are_used(raw_product):
    product = normalize(
        raw_product(
            variants=[{"price": "5.00", "inventory_quantity": 1}, {"price": "99.00", "inventory_quantity": 0}],
            images=[{"src": "first.jpg"}, {"src": "second.jpg"}],
        )
    )

    assert product.price == "€5.00"
    assert product.image_url == "first.jpg"


def test_clean_description_strips_markup_and_caps_length():
    html = "<div>" + ("palavra&nbsp;" * 100) + "</div>\n\n  <p>fim</p>"

    text = clean_description(html)

    assert "<" not in text
    assert "&nbsp;" not in text
    assert "  " not in text
    assert len(text) == 300


def test_clean_description_respects_configured_cap(raw_product):
    config = CatalogSyncConfig(normalization=NormalizationConfig(description_max_length=10))

    product = normalize(raw_product(body_html="<p>" + "x" * 50 + "</p>"), config)

    assert product.description == "x" * 10


@pytest.mark.parametrize(
    "value, expected",
    [
        ("9.5", Decimal("9.50")),
        ("0.105", Decimal("0.11")),
        (12, Decimal("12.00")),
        ("-3", Decimal("0.00")),
        ("NaN", Decimal("0.00")),
        ("1e30", Decimal("0.00")),
        (None, Decimal("0.00")),
    ],
)
def test_parse_price(value, expected):
    assert parse_price(value) == expected


def test_local_language_labels_from_config(raw_product):
    config = CatalogSyncConfig(
        normalization=NormalizationConfig(in_stock_label="Em stock", out_of_stock_label="Sem stock")
    )

    assert normalize(raw_product(), config).availability == "Em stock"
    assert normalize(raw_product(variants=[]), config).availability == "Sem stock"


def test_tag_lists_are_joined(raw_product):
    assert normalize(raw_product(tags=["a", "b"])).tags == "a, b"
