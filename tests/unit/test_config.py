"""Tests for PoolConfig."""

import pytest

from dex.config import DEFAULT_POOL_CONFIG, PoolConfig


class TestPoolConfig:
    def test_defaults(self):
        assert DEFAULT_POOL_CONFIG.fee_bps == 30
        assert DEFAULT_POOL_CONFIG.fee_multiplier == 9970
        assert DEFAULT_POOL_CONFIG.token_a != DEFAULT_POOL_CONFIG.token_b

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_POOL_CONFIG.fee_bps = 10  # type: ignore[misc]

    @pytest.mark.parametrize("fee_bps", [-1, 10000, 20000])
    def test_invalid_fee_rejected(self, fee_bps):
        with pytest.raises(ValueError):
            PoolConfig(fee_bps=fee_bps)

    def test_same_asset_rejected(self):
        with pytest.raises(ValueError):
            PoolConfig(token_a="X", token_b="X")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DEX_TOKEN_A", "WETH")
        monkeypatch.setenv("DEX_TOKEN_B", "USDC")
        monkeypatch.setenv("DEX_POOL_ADDRESS", "weth-usdc")
        monkeypatch.setenv("DEX_FEE_BPS", "25")

        config = PoolConfig.from_env()

        assert config == PoolConfig(token_a="WETH", token_b="USDC", address="weth-usdc", fee_bps=25)
        assert config.fee_multiplier == 9975

    def test_from_env_defaults(self, monkeypatch):
        for name in ("DEX_TOKEN_A", "DEX_TOKEN_B", "DEX_POOL_ADDRESS", "DEX_FEE_BPS"):
            monkeypatch.delenv(name, raising=False)
        assert PoolConfig.from_env() == DEFAULT_POOL_CONFIG
