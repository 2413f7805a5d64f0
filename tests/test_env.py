"""
Tests for environment and view configuration loading.
"""
from pathlib import Path

import pytest

from packages.config.env import Cfg, load_cfg, load_view_cfg
from packages.core.errors import MissingCredential

KEYS = ["PRIVATE_KEY", "GOLEM_CHAIN_ID", "GOLEM_RPC_URL", "GOLEM_WS_URL", "HYPERLIQUID_API_URL",
        "STORE_BACKEND", "LEADERBOARD_BTL", "TRADE_BTL", "DEFAULT_LEADERBOARD_DATE", "API_HOST", "API_PORT"]


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so teardown also removes anything load_dotenv adds
    for k in KEYS:
        monkeypatch.setenv(k, "")
        monkeypatch.delenv(k)
    return monkeypatch


class TestLoadCfg:
    def test_defaults(self, clean_env, tmp_path):
        cfg = load_cfg(str(tmp_path / "missing.env"))
        assert cfg.private_key is None
        assert cfg.store_backend == "golem"
        assert cfg.leaderboard_btl == 50000 and cfg.trade_btl == 10000
        assert cfg.default_date == "2025-09-07"
        assert cfg.api_port == 3005

    def test_reads_dotenv_file(self, clean_env, tmp_path):
        env = tmp_path / ".env"
        env.write_text("PRIVATE_KEY=0x0102ff\nSTORE_BACKEND=memory\nAPI_PORT=8080\nLEADERBOARD_BTL=7\n")
        cfg = load_cfg(str(env))
        assert cfg.store_backend == "memory"
        assert cfg.api_port == 8080
        assert cfg.leaderboard_btl == 7
        assert cfg.private_key_bytes() == b"\x01\x02\xff"

    def test_process_env_wins(self, clean_env, tmp_path):
        env = tmp_path / ".env"
        env.write_text("DEFAULT_LEADERBOARD_DATE=2025-01-01\n")
        clean_env.setenv("DEFAULT_LEADERBOARD_DATE", "2025-09-06")
        assert load_cfg(str(env)).default_date == "2025-09-06"


    def test_only_used_settings_are_loaded(self, clean_env, tmp_path):
        env = tmp_path / ".env"
        env.write_text("GOLEM_CHAIN_ID=60138453033\n")
        cfg = load_cfg(str(env))
        assert "chain_id" not in cfg.model_dump()


class TestPrivateKey:
    def test_missing(self):
        with pytest.raises(MissingCredential, match="PRIVATE_KEY environment variable is required"):
            Cfg().private_key_bytes()

    def test_without_prefix(self):
        assert Cfg(private_key="abcd").private_key_bytes() == b"\xab\xcd"

    def test_invalid_hex(self):
        with pytest.raises(MissingCredential):
            Cfg(private_key="0xzz").private_key_bytes()


class TestViewCfg:
    def test_repo_config(self):
        view = load_view_cfg(str(Path(__file__).resolve().parents[1] / "configs" / "leaderboard.yml"))
        assert view["min_all_time_pnl"] == 1000
        assert view["page_size"] == 10
        assert view["default_sort"] == "allTimePnl"

    def test_missing_file(self, tmp_path):
        assert load_view_cfg(str(tmp_path / "nope.yml")) == {}

    def test_no_view_section(self, tmp_path):
        path = tmp_path / "lb.yml"
        path.write_text("other: 1\n")
        assert load_view_cfg(str(path)) == {}
