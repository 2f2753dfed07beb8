import json

import pytest

from stonks.config import Config, default_config, load_config
from stonks.errors import ConfigLoadError


def test_default_config():
    assert default_config() == Config(transactions_file="transactions.csv")


def test_load_config_reads_transactions_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"transactionsFile": "history.csv", "other": 1}))

    assert load_config(path).transactions_file == "history.csv"


@pytest.mark.parametrize("payload", [{}, {"transactionsFile": ""}, {"transactionsFile": None}])
def test_load_config_unset_file_uses_default(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload))

    assert load_config(path) == default_config()


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError, match="Cannot read config"):
        load_config(tmp_path / "missing.json")


def test_load_config_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")

    with pytest.raises(ConfigLoadError, match="Invalid JSON"):
        load_config(path)


@pytest.mark.parametrize("content", ["[]", '"x"', '{"transactionsFile": 3}'])
def test_load_config_wrong_shape(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)

    with pytest.raises(ConfigLoadError):
        load_config(path)
