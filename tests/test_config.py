from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from httpr.config.loader import create_example_config, load_config, validate_config_file
from httpr.config.schema import FailureCycleConfig, HttprConfig, LoggingConfig


def write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.safe_dump(data))
    return path


def test_defaults():
    cfg = load_config()
    assert cfg.listen == "localhost:8080"
    assert cfg.address == ("localhost", 8080)
    assert cfg.response.code == 200
    assert cfg.failure_mode.enabled is False
    assert cfg.logging.json_format is False


@pytest.mark.parametrize("field", ["failure_count", "success_count"])
def test_negative_counts_rejected(field):
    with pytest.raises(ValidationError):
        FailureCycleConfig(**{field: -1})


@pytest.mark.parametrize("code", [0, 99, 100, 102, 199, 600, 1000, -200])
def test_out_of_range_codes_rejected(code):
    with pytest.raises(ValidationError):
        FailureCycleConfig(failure_code=code)
    with pytest.raises(ValidationError):
        FailureCycleConfig(success_code=code)
    with pytest.raises(ValidationError):
        HttprConfig(response={"code": code})


def test_negative_delay_rejected():
    with pytest.raises(ValidationError):
        HttprConfig(response={"delay_ms": -5})


@pytest.mark.parametrize("listen,expected", [
    (":9000", ("0.0.0.0", 9000)),
    ("127.0.0.1:8081", ("127.0.0.1", 8081)),
    (8082, ("0.0.0.0", 8082)),
    ("[::1]:8083", ("::1", 8083)),
    ("[::]:8084", ("::", 8084)),
])
def test_listen_parsing(listen, expected):
    assert HttprConfig(listen=listen).address == expected


@pytest.mark.parametrize("listen", ["localhost", "host:abc", ":0", ":70000"])
def test_bad_listen_rejected(listen):
    with pytest.raises(ValidationError):
        HttprConfig(listen=listen)


def test_pretty_implies_json():
    assert LoggingConfig(pretty=True).json_format is True
    assert LoggingConfig(json=True).json_format is True
    assert LoggingConfig(level="debug").level == "DEBUG"


def test_config_is_immutable():
    cfg = FailureCycleConfig(enabled=True, failure_count=1)
    with pytest.raises(ValidationError):
        cfg.failure_count = 5


def test_load_from_file_with_overrides(tmp_path):
    path = write_yaml(tmp_path / "httpr.yaml", {
        "listen": ":9090",
        "failure_mode": {"enabled": True, "failure_count": 2, "success_count": 1},
    })

    cfg = load_config(path, {"failure_mode": {"failure_code": 502}, "response": {"echo": True}})
    assert cfg.port == 9090
    assert cfg.failure_mode.failure_count == 2
    assert cfg.failure_mode.failure_code == 502
    assert cfg.response.echo is True


def test_reload_is_stable(tmp_path):
    path = write_yaml(tmp_path / "httpr.yaml", {"failure_mode": {"enabled": True, "failure_count": 3}})
    assert load_config(path) == load_config(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    with pytest.raises(ValueError, match="empty"):
        load_config(path)


def test_validate_reports_field_errors(tmp_path):
    path = write_yaml(tmp_path / "bad.yaml", {
        "failure_mode": {"failure_count": -1, "success_code": 700},
    })
    errors = validate_config_file(path)
    assert len(errors) == 2
    assert any(e.startswith("failure_mode.failure_count") for e in errors)
    assert any(e.startswith("failure_mode.success_code") for e in errors)


def test_validate_yaml_syntax_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("listen: [unclosed\n")
    errors = validate_config_file(path)
    assert errors and errors[0].startswith("YAML parsing error")


def test_example_config_is_valid(tmp_path):
    path = tmp_path / "example.yaml"
    path.write_text(create_example_config())
    assert validate_config_file(path) == []
    cfg = load_config(path)
    assert cfg.failure_mode.enabled is True
    assert cfg.logging.json_format is True
