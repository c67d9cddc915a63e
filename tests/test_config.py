import json
import logging
from authorized_keys.config import ParserConfig, load_config
from authorized_keys.logger import get_logger

# CMD Line Usage: pytest -v -s --log-cli-level=DEBUG .\tests\test_config.py


def test_defaults(monkeypatch):
    monkeypatch.delenv("AUTHKEYS_STRICT_BASE64", raising=False)
    assert load_config() == ParserConfig(strict_base64=False)


def test_env_and_explicit_precedence(monkeypatch):
    monkeypatch.setenv("AUTHKEYS_STRICT_BASE64", "true")
    assert load_config().strict_base64 is True

    # explicit config wins over the environment
    assert load_config({"strict_base64": False}).strict_base64 is False

    monkeypatch.setenv("AUTHKEYS_STRICT_BASE64", "0")
    assert load_config().strict_base64 is False
    assert load_config({"strict_base64": "yes"}).strict_base64 is True


def test_logger_level_from_env(monkeypatch):
    monkeypatch.setenv("AUTHKEYS_LOG_LEVEL", "debug")
    log = get_logger("authorized_keys.test.env")
    assert log.level == logging.DEBUG


def test_logger_writes_json_lines(tmp_path):
    path = tmp_path / "logs" / "authkeys.log"
    log = get_logger("authorized_keys.test.file", level=logging.INFO, to_file=str(path))
    log.info("hello")

    for handler in log.handlers:
        handler.flush()

    record = json.loads(path.read_text().strip().splitlines()[-1])
    assert record["level"] == "INFO"
    assert record["name"] == "authorized_keys.test.file"
    assert record["msg"] == "hello"
