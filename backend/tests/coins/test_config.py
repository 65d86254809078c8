"""Tests for CoinSettings.from_env."""

from app.coins.config import CACHE_EXPIRATION, COINGECKO_MARKETS_URL, COINS_CACHE_KEY, CoinSettings


class TestCoinSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        """Test defaults with an empty environment."""
        settings = CoinSettings.from_env({})
        assert settings.data_source == "coingecko"
        assert settings.upstream_url == COINGECKO_MARKETS_URL
        assert settings.page_count == 4
        assert settings.page_size == 250
        assert settings.cache_key == COINS_CACHE_KEY
        assert settings.cache_ttl == CACHE_EXPIRATION == 600
        assert settings.refresh_interval == 600.0
        assert settings.upstream_timeout == 5.0
        assert settings.coalesce_builds is True
        assert settings.redis_url is None
        assert settings.port == 5000

    def test_overrides(self):
        """Test that every variable is picked up."""
        settings = CoinSettings.from_env(
            {
                "MARKET_DATA_SOURCE": "simulator",
                "COINGECKO_URL": "http://localhost:9000/markets",
                "COINGECKO_API_KEY": "cg",
                "COINS_VS_CURRENCY": "eur",
                "COINS_ORDER": "volume_desc",
                "UPSTREAM_TIMEOUT": "2.5",
                "COINS_PAGE_COUNT": "2",
                "COINS_PAGE_SIZE": "100",
                "CACHE_EXPIRATION": "120",
                "REFRESH_INTERVAL": "60",
                "COINS_COALESCE_BUILDS": "false",
                "REDIS_URL": "rediss://example.upstash.io:6379",
                "REDIS_PASSWORD": "secret",
                "PORT": "8080",
            }
        )
        assert settings.data_source == "simulator"
        assert settings.upstream_url == "http://localhost:9000/markets"
        assert settings.upstream_api_key == "cg"
        assert settings.vs_currency == "eur"
        assert settings.order == "volume_desc"
        assert settings.upstream_timeout == 2.5
        assert settings.page_count == 2
        assert settings.page_size == 100
        assert settings.cache_ttl == 120
        assert settings.refresh_interval == 60.0
        assert settings.coalesce_builds is False
        assert settings.redis_url == "rediss://example.upstash.io:6379"
        assert settings.redis_password == "secret"
        assert settings.port == 8080

    def test_refresh_interval_follows_ttl(self):
        """Test that the refresh period defaults to the cache TTL."""
        settings = CoinSettings.from_env({"CACHE_EXPIRATION": "300"})
        assert settings.refresh_interval == 300.0

    def test_malformed_numbers_fall_back(self):
        """Test that junk or non-positive values are replaced by defaults."""
        settings = CoinSettings.from_env(
            {"COINS_PAGE_SIZE": "lots", "CACHE_EXPIRATION": "-5", "UPSTREAM_TIMEOUT": "0", "PORT": "http"}
        )
        assert settings.page_size == 250
        assert settings.cache_ttl == 600
        assert settings.upstream_timeout == 5.0
        assert settings.port == 5000

    def test_blank_values_ignored(self):
        settings = CoinSettings.from_env({"REDIS_URL": "   ", "MARKET_DATA_SOURCE": ""})
        assert settings.redis_url is None
        assert settings.data_source == "coingecko"

    def test_bool_parsing(self):
        assert CoinSettings.from_env({"COINS_COALESCE_BUILDS": "0"}).coalesce_builds is False
        assert CoinSettings.from_env({"COINS_COALESCE_BUILDS": "YES"}).coalesce_builds is True
        assert CoinSettings.from_env({"COINS_COALESCE_BUILDS": "maybe"}).coalesce_builds is True
