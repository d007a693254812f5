import pytest
from pydantic import ValidationError

from src.utils.config_loader import ShopifySettings, load_sync_config


def test_bundled_config_loads():
    config = load_sync_config()

    assert config.storefront.currency == "EUR"
    assert config.normalization.description_max_length == 300
    assert config.artifacts.names() == ["catalogo.csv", "catalogo.json", "produtos.json"]
    assert config.fetch.page_size == 250
    assert config.webhook.debounce_seconds == 300


def test_partial_config_uses_defaults(tmp_path):
    path = tmp_path / "sync.yml"
    path.write_text("webhook:\n  debounce_seconds: 5\n", encoding="utf-8")

    config = load_sync_config(path)

    assert config.webhook.debounce_seconds == 5
    assert config.storefront.base_url == "https://bastidorcolorido.pt"


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.yml"
    path.write_text("storefront:\n  currency: USD\n  currency_symbol: $\n", encoding="utf-8")
    monkeypatch.setenv("CATALOG_SYNC_CONFIG", str(path))

    assert load_sync_config().storefront.currency == "USD"


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sync_config(tmp_path / "missing.yml")


def test_invalid_config_raises(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("fetch:\n  page_size: 1000\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_sync_config(path)


def test_shopify_settings_from_env(monkeypatch):
    monkeypatch.setenv("SHOPIFY_SHOP", "my-shop")
    monkeypatch.setenv("SHOPIFY_TOKEN", "shpat_abc")
    monkeypatch.delenv("SHOPIFY_API_VERSION", raising=False)

    settings = ShopifySettings.from_env()

    assert settings.credential_configured is True
    assert settings.products_url == "https://my-shop.myshopify.com/admin/api/2023-10/products.json"


def test_shopify_settings_without_token(monkeypatch):
    monkeypatch.delenv("SHOPIFY_TOKEN", raising=False)

    assert ShopifySettings.from_env().credential_configured is False
