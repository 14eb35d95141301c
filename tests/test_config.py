"""config モジュールのユニットテスト。"""

import logging
from pathlib import Path

import yaml

from casematch.config import (
    SAMPLE_DOMAINS,
    AppConfig,
    _app_config_to_dict,
    _dict_to_app_config,
    generate_default,
    load,
    save,
)


# ────────────────────────────────────────────
# dict ↔ AppConfig 変換
# ────────────────────────────────────────────

class TestDictConversion:
    def test_empty_dict_produces_defaults(self):
        config = _dict_to_app_config({})
        assert config.language == "ja"
        assert config.log_level == "INFO"
        assert config.log_file == ""
        assert config.domains == {}

    def test_custom_values_roundtrip(self):
        config = AppConfig(
            language="en",
            log_level="DEBUG",
            log_file="/tmp/x.log",
            domains={"country": ["US", "DE"]},
        )
        restored = _dict_to_app_config(_app_config_to_dict(config))
        assert restored == config

    def test_non_list_domain_ignored(self):
        config = _dict_to_app_config({"domains": {"country": ["US"], "broken": "US,DE"}})
        assert config.domains == {"country": ["US"]}

    def test_domains_not_a_dict(self):
        config = _dict_to_app_config({"domains": ["US", "DE"]})
        assert config.domains == {}

    def test_unquoted_yaml_boolean_label_warns(self, caplog):
        # YAML 1.1 では引用符なしの NO は False になる
        data = yaml.safe_load("domains:\n  country: [US, NO]\n")
        with caplog.at_level(logging.WARNING, logger="casematch.config"):
            config = _dict_to_app_config(data)
        assert config.domains == {"country": ["US", False]}
        assert "country" in caplog.text
        assert "False" in caplog.text

    def test_null_log_file(self):
        config = _dict_to_app_config({"log_file": None})
        assert config.log_file == ""


# ────────────────────────────────────────────
# load / save (ファイル I/O)
# ────────────────────────────────────────────

class TestLoadSave:
    def test_save_and_load(self, tmp_path: Path):
        config = AppConfig(log_level="WARNING", domains={"status": ["draft", "published"]})
        path = tmp_path / "config.yaml"
        save(config, path)
        loaded = load(path)
        assert loaded.log_level == "WARNING"
        assert loaded.domains == {"status": ["draft", "published"]}

    def test_load_nonexistent_returns_default(self, tmp_path: Path):
        loaded = load(tmp_path / "nope.yaml")
        assert loaded == AppConfig()

    def test_load_corrupt_returns_default(self, tmp_path: Path):
        path = tmp_path / "corrupt.yaml"
        # ルートが辞書ではない YAML は ValueError になる
        path.write_text("- a\n- b\n", encoding="utf-8")
        notifications: list[tuple[str, str]] = []
        loaded = load(path, notify_callback=lambda t, m: notifications.append((t, m)))
        assert loaded == AppConfig()
        assert len(notifications) == 1

    def test_load_unparseable_yaml_returns_default(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("domains: [unclosed", encoding="utf-8")
        notifications: list[tuple[str, str]] = []
        loaded = load(path, notify_callback=lambda t, m: notifications.append((t, m)))
        assert loaded == AppConfig()
        assert len(notifications) == 1

    def test_load_from_bak(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        bak = tmp_path / "config.yaml.bak"
        d = _app_config_to_dict(AppConfig(domains={"country": ["GB"]}))
        bak.write_text(yaml.dump(d, allow_unicode=True), encoding="utf-8")
        loaded = load(path)
        assert loaded.domains == {"country": ["GB"]}

    def test_boolean_like_labels_survive_roundtrip(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        save(AppConfig(domains={"country": ["US", "NO", "ON"]}), path)
        assert load(path).domains == {"country": ["US", "NO", "ON"]}

    def test_yaml_written_in_field_order(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        save(AppConfig(), path)
        keys = list(yaml.safe_load(path.read_text(encoding="utf-8")))
        assert keys == ["language", "log_level", "log_file", "domains"]


# ────────────────────────────────────────────
# generate_default
# ────────────────────────────────────────────

class TestGenerateDefault:
    def test_generates_file_with_sample_domains(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        config = generate_default(path)
        assert path.exists()
        assert config.domains == SAMPLE_DOMAINS
        assert load(path).domains == SAMPLE_DOMAINS

    def test_sample_domains_not_shared(self, tmp_path: Path):
        config = generate_default(tmp_path / "config.yaml")
        config.domains["country"].append("FR")
        assert "FR" not in SAMPLE_DOMAINS["country"]
