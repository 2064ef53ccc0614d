from __future__ import annotations

import os
from pathlib import Path
from typing import cast

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"
DEFAULT_DOTENV_PATH = Path(__file__).resolve().parents[2] / ".env"


def _load_dotenv(path: Path) -> None:
    if not path.exists():
        return

    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key or key in os.environ:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
            value = value[1:-1]
        os.environ[key] = value


REQUIRED_SECTIONS = {
    "system",
    "lessons",
}

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}
QUIZ_OPTION_COUNT = 4


def _ensure_dict(value: object) -> dict[str, object]:
    if isinstance(value, dict):
        return cast(dict[str, object], value)
    return {}


def _coerce_str(value: object, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _coerce_str_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def _apply_system_defaults(system: dict[str, object]) -> None:
    system["log_dir"] = _coerce_str(system.get("log_dir"), "data/logs")
    system["output_dir"] = _coerce_str(system.get("output_dir"), "data/output")

    log_level = _coerce_str(system.get("log_level"), "INFO").upper()
    if log_level not in LOG_LEVELS:
        log_level = "INFO"
    system["log_level"] = log_level


def _apply_lesson_defaults(lessons: dict[str, object]) -> None:
    lessons["source_dir"] = _coerce_str(lessons.get("source_dir"), "content/lessons")
    lessons["output_name"] = _coerce_str(lessons.get("output_name"), "lessons.json")
    lessons["order"] = _coerce_str_list(lessons.get("order"))
    if "exclude" not in lessons:
        lessons["exclude"] = ["README.md"]
    else:
        lessons["exclude"] = _coerce_str_list(lessons.get("exclude"))


def _validate_override(lesson_id: str, override: object) -> dict[str, object]:
    if not isinstance(override, dict):
        raise ValueError(f"Quiz override for '{lesson_id}' must be a mapping")
    override = cast(dict[str, object], override)

    options = override.get("options")
    if options is not None:
        if not isinstance(options, list) or len(options) != QUIZ_OPTION_COUNT:
            raise ValueError(f"Quiz override for '{lesson_id}' must list exactly {QUIZ_OPTION_COUNT} options")
        if override.get("correct_answer_id") not in {"a", "b", "c", "d"}:
            raise ValueError(f"Quiz override for '{lesson_id}' needs correct_answer_id in a..d")
        return override

    correct_answer = override.get("correct_answer")
    if not isinstance(correct_answer, str) or not correct_answer.strip():
        raise ValueError(f"Quiz override for '{lesson_id}' needs correct_answer or options")
    return override


def _apply_quiz_defaults(quiz: dict[str, object]) -> None:
    quiz["reproducible"] = bool(quiz.get("reproducible", False))
    overrides = _ensure_dict(quiz.get("overrides"))
    quiz["overrides"] = {
        str(lesson_id): _validate_override(str(lesson_id), override)
        for lesson_id, override in overrides.items()
    }


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> dict[str, object]:
    _load_dotenv(DEFAULT_DOTENV_PATH)
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw_data = cast(object, yaml.safe_load(config_path.read_text(encoding="utf-8")))
    if not isinstance(raw_data, dict):
        raise ValueError("Config must be a mapping")
    data = cast(dict[str, object], raw_data)

    missing = REQUIRED_SECTIONS.difference(data.keys())
    if missing:
        raise ValueError(f"Config missing sections: {', '.join(sorted(missing))}")

    for section in ("system", "lessons"):
        if not isinstance(data.get(section), dict):
            raise ValueError(f"Config {section} section must be a mapping")

    system = cast(dict[str, object], data["system"])
    _apply_system_defaults(system)

    lessons = cast(dict[str, object], data["lessons"])
    _apply_lesson_defaults(lessons)

    quiz = _ensure_dict(data.get("quiz"))
    _apply_quiz_defaults(quiz)
    data["quiz"] = quiz

    env_map = {
        "LT_SOURCE_DIR": (lessons, "source_dir"),
        "LT_OUTPUT_DIR": (system, "output_dir"),
    }
    for env_name, (section_data, key_name) in env_map.items():
        value = os.environ.get(env_name)
        if value:
            section_data[key_name] = value

    return data
