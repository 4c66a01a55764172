"""Tests for Settings and the composition root."""

from pathlib import Path

from shop.application.dto import ProductSpec
from shop.infrastructure.bootstrap import build_services
from shop.infrastructure.config import Settings
from tests.fakes import RecordingChannel


class TestSettings:

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("SHOP_DATA_DIR", "SHOP_REDIS_URL", "SHOP_REDIS_CHANNEL", "SHOP_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings.data_dir.name == "data"
        assert settings.redis_url == ""
        assert settings.redis_channel == "inventory_events"
        assert settings.log_level == "INFO"
        assert not settings.realtime_enabled

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SHOP_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("SHOP_REDIS_URL", "redis://localhost:6379/0")
        monkeypatch.setenv("SHOP_REDIS_CHANNEL", "stock")
        monkeypatch.setenv("SHOP_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.data_dir == Path(tmp_path)
        assert settings.redis_channel == "stock"
        assert settings.log_level == "DEBUG"
        assert settings.realtime_enabled


class TestBuildServices:

    def test_wires_json_stores_without_realtime(self, tmp_path):
        services = build_services(Settings(data_dir=tmp_path))
        try:
            assert not services.broadcaster.attached
            assert (tmp_path / "products.json").exists()
            assert (tmp_path / "inventory.json").exists()
            assert (tmp_path / "carts.json").exists()
        finally:
            services.close()

    def test_ledger_changes_reach_broadcaster(self, tmp_path):
        services = build_services(Settings(data_dir=tmp_path))
        channel = RecordingChannel()
        services.broadcaster.attach(channel)

        product = services.catalog.create(ProductSpec("Oat Milk", "6.99"))
        record = services.ledger.create(services.product_guard.require(product.id), 5)
        services.close()

        assert channel.emitted[0][1]["id"] == record.id
        assert channel.emitted[0][1]["quantity"] == 5
        assert channel.closed
