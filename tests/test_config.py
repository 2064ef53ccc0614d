from pathlib import Path
import uuid

import pytest
import yaml

from utils.config import load_config


def _make_temp_dir() -> Path:
    root = Path(__file__).resolve().parents[1]
    tmp_root = root / "data" / "output" / "logs" / "pytest_tmp"
    tmp_root.mkdir(parents=True, exist_ok=True)
    temp_dir = tmp_root / uuid.uuid4().hex
    temp_dir.mkdir(parents=True, exist_ok=True)
    return temp_dir


def _write_config(config_data: dict) -> Path:
    config_path = _make_temp_dir() / "config.yaml"
    config_path.write_text(yaml.safe_dump(config_data), encoding="utf-8")
    return config_path


def test_load_config_success():
    config_path = _write_config(
        {
            "system": {"log_level": "debug"},
            "lessons": {"source_dir": "docs", "order": ["1-a.md", "2-b.md"]},
        }
    )

    loaded = load_config(config_path)
    assert loaded["lessons"]["source_dir"] == "docs"
    assert loaded["lessons"]["order"] == ["1-a.md", "2-b.md"]
    assert loaded["system"]["log_level"] == "DEBUG"


def test_load_config_defaults():
    loaded = load_config(_write_config({"system": {}, "lessons": {}}))

    assert loaded["system"]["output_dir"] == "data/output"
    assert loaded["system"]["log_level"] == "INFO"
    assert loaded["lessons"]["order"] == []
    assert loaded["lessons"]["exclude"] == ["README.md"]
    assert loaded["quiz"] == {"reproducible": False, "overrides": {}}


def test_load_config_missing_sections():
    with pytest.raises(ValueError):
        load_config(_write_config({"system": {}}))


def test_load_config_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config(_make_temp_dir() / "absent.yaml")


def test_load_config_rejects_non_mapping():
    config_path = _make_temp_dir() / "config.yaml"
    config_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(config_path)


@pytest.mark.parametrize(
    "override",
    [
        "not a mapping",
        {"options": ["a", "b", "c"], "correct_answer_id": "a"},
        {"options": ["a", "b", "c", "d"], "correct_answer_id": "e"},
        {"question": "No answer given?"},
    ],
)
def test_invalid_quiz_override(override):
    config_path = _write_config({"system": {}, "lessons": {}, "quiz": {"overrides": {"intro": override}}})

    with pytest.raises(ValueError):
        load_config(config_path)


def test_env_overrides_paths(monkeypatch):
    monkeypatch.setenv("LT_SOURCE_DIR", "/srv/lessons")
    monkeypatch.setenv("LT_OUTPUT_DIR", "/srv/output")

    loaded = load_config(_write_config({"system": {}, "lessons": {}}))

    assert loaded["lessons"]["source_dir"] == "/srv/lessons"
    assert loaded["system"]["output_dir"] == "/srv/output"


def test_bundled_config_loads():
    root = Path(__file__).resolve().parents[1]

    loaded = load_config(root / "config" / "config.yaml")

    assert loaded["lessons"]["order"][0] == "1-what-is-nextjs.md"
    assert loaded["quiz"]["overrides"]["creating-pages"]["correct_answer_id"] == "b"
