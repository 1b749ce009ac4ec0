import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

from studybudget.core import settings
from studybudget.logger import get_logger

if TYPE_CHECKING:
    from studybudget.integration.wellness import WellnessAssessmentService

ValueType = Literal["string", "int", "float"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConfigField:
    key: str
    label: str
    description: str
    category: str
    value_type: ValueType = "string"
    sensitive: bool = False
    options: tuple[str, ...] | None = None
    min_value: float | int | None = None
    max_value: float | int | None = None
    restart_required: bool = False


CONFIG_FIELDS: tuple[ConfigField, ...] = (
    ConfigField(
        key="OPENAI_API_KEY",
        label="OpenAI API Key",
        description="API key for the lifestyle assessment. Leave empty to disable it.",
        category="OpenAI",
        sensitive=True,
    ),
    ConfigField(
        key="OPENAI_MODEL",
        label="OpenAI Model",
        description="Model name for the OpenAI-compatible client.",
        category="OpenAI",
    ),
    ConfigField(
        key="OPENAI_BASE_URL",
        label="OpenAI Base URL",
        description="Override the OpenAI base URL for compatible providers.",
        category="OpenAI",
    ),
    ConfigField(
        key="MEMORY_THRESHOLD",
        label="Memory Match Threshold",
        description="Minimum fuzzy score (0-100) to reuse a previously saved category.",
        category="Suggestions",
        value_type="float",
        min_value=0,
        max_value=100,
    ),
    ConfigField(
        key="SUGGESTION_MIN_LENGTH",
        label="Minimum Description Length",
        description="Shorter descriptions get no category suggestion.",
        category="Suggestions",
        value_type="int",
        min_value=0,
    ),
    ConfigField(
        key="REMINDER_CHECK_INTERVAL",
        label="Reminder Check Interval",
        description="Seconds between reminder checks. 0 disables background checks.",
        category="Reminders",
        value_type="int",
        min_value=0,
        restart_required=True,
    ),
    ConfigField(
        key="REMINDER_WINDOW_HOURS",
        label="Reminder Window",
        description="Notify reminders due within this many hours.",
        category="Reminders",
        value_type="float",
        min_value=0,
    ),
    ConfigField(
        key="CURRENCY_SYMBOL",
        label="Currency Symbol",
        description="Symbol used in insights and reminder notifications.",
        category="Reminders",
    ),
    ConfigField(
        key="DATA_DIR",
        label="Data Directory",
        description="Directory for profile.json and memory.json.",
        category="Storage",
        restart_required=True,
    ),
    ConfigField(
        key="LOG_DIR",
        label="Log Directory",
        description="Directory for the application log file.",
        category="Storage",
        restart_required=True,
    ),
    ConfigField(
        key="LOG_LEVEL",
        label="Log Level",
        description="Logging verbosity for the application.",
        category="Storage",
        options=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        restart_required=True,
    ),
)

CONFIG_HEADER = """# Student budget configuration
# Values here only apply when the same environment variable is not set.
"""

_FIELDS_BY_KEY = {field.key: field for field in CONFIG_FIELDS}


def get_config_path() -> str:
    config_path = settings.get_config_path()
    if config_path:
        return config_path
    return os.path.join(os.getcwd(), "config", settings.CONFIG_FILENAME)


def build_config_context() -> dict[str, Any]:
    """Describe every editable field, grouped by section, without leaking secrets."""
    config_values = settings.read_config_file(get_config_path())
    sections: dict[str, list[dict[str, Any]]] = {}
    env_override_count = 0

    for field in CONFIG_FIELDS:
        env_override = settings.is_env_override(field.key)
        if env_override:
            env_override_count += 1
            value = os.getenv(field.key, "")
        else:
            value = config_values.get(field.key, "")
        if field.sensitive and value:
            value = settings.mask_env_value(field.key, value)

        sections.setdefault(field.category, []).append({
            "key": field.key,
            "label": field.label,
            "description": field.description,
            "value": value,
            "value_type": field.value_type,
            "options": field.options,
            "read_only": env_override,
            "sensitive": field.sensitive,
            "restart_required": field.restart_required,
        })

    return {
        "config_path": get_config_path(),
        "sections": [{"name": name, "fields": fields} for name, fields in sections.items()],
        "env_override_count": env_override_count,
    }


def _check_range(field: ConfigField, parsed: float) -> str | None:
    if field.min_value is not None and parsed < field.min_value:
        return f"Must be at least {field.min_value}."
    if field.max_value is not None and parsed > field.max_value:
        return f"Must be at most {field.max_value}."
    return None


def validate_value(field: ConfigField, raw_value: str) -> tuple[str, str | None]:
    value = raw_value.strip()
    if not value:
        return "", None

    if "\n" in value or "\r" in value:
        return value, "Value must be a single line."

    if field.options:
        normalized = value.upper()
        if normalized not in field.options:
            return value, f"Must be one of: {', '.join(field.options)}."
        return normalized, None

    if field.value_type == "int":
        try:
            parsed_int = int(value)
        except ValueError:
            return value, "Must be a whole number."
        return str(parsed_int), _check_range(field, parsed_int)

    if field.value_type == "float":
        try:
            parsed_float = float(value)
        except ValueError:
            return value, "Must be a number."
        return str(parsed_float), _check_range(field, parsed_float)

    return value, None


def apply_config_updates(form_values: dict[str, Any]) -> tuple[dict[str, str], dict[str, str]]:
    """Validate and persist submitted values. Returns ``(errors, applied_updates)``."""
    errors: dict[str, str] = {}
    updates: dict[str, str] = {}

    for key, raw_value in form_values.items():
        field = _FIELDS_BY_KEY.get(key)
        if field is None:
            errors[key] = "Unknown setting."
            continue
        if settings.is_env_override(key):
            errors[key] = "Set via environment variable."
            continue

        cleaned, error = validate_value(field, "" if raw_value is None else str(raw_value))
        if error:
            errors[key] = error
            continue
        updates[key] = cleaned

    if errors:
        return errors, {}

    write_config_file(updates)
    _apply_runtime_overrides(updates)
    return {}, updates


def write_config_file(updates: dict[str, str]) -> None:
    config_path = get_config_path()
    config_dir = os.path.dirname(config_path)
    if config_dir:
        os.makedirs(config_dir, exist_ok=True)

    if os.path.exists(config_path):
        with open(config_path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    else:
        lines = CONFIG_HEADER.splitlines()

    key_indexes: dict[str, int] = {}
    for index, line in enumerate(lines):
        candidate = line.strip().lstrip("#").strip()
        if ":" not in candidate:
            continue
        key = candidate.split(":", 1)[0].strip()
        if key in updates and key not in key_indexes:
            key_indexes[key] = index

    for key, value in updates.items():
        new_line = f"{key}: {format_yaml_value(value)}" if value else f"# {key}:"
        if key in key_indexes:
            lines[key_indexes[key]] = new_line
        else:
            lines.append(new_line)

    with open(config_path, "w", encoding="utf-8") as handle:
        handle.write("\n".join(lines).rstrip("\n") + "\n")


def _apply_runtime_overrides(updates: dict[str, str]) -> None:
    for key, value in updates.items():
        if value:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


def apply_runtime_updates(app: Any, updates: dict[str, str]) -> None:
    state = getattr(app, "state", None)
    if not updates or state is None:
        return

    if {"OPENAI_API_KEY", "OPENAI_MODEL", "OPENAI_BASE_URL"} & updates.keys():
        state.assessment = create_assessment_service()

    if {"MEMORY_THRESHOLD", "SUGGESTION_MIN_LENGTH"} & updates.keys():
        service = getattr(state, "suggestions", None)
        if service is not None:
            service.refresh()

    if {"REMINDER_WINDOW_HOURS", "CURRENCY_SYMBOL"} & updates.keys():
        notifier = getattr(state, "reminder_notifier", None)
        if notifier is not None:
            notifier.window_hours = settings.reminder_window_hours()
            notifier.currency = settings.currency_symbol()
            logger.info("[CONFIG] Reminder settings refreshed.")


def create_assessment_service() -> "WellnessAssessmentService | None":
    from studybudget.integration.wellness import WellnessAssessmentService

    if not os.getenv("OPENAI_API_KEY"):
        logger.info("[CONFIG] OPENAI_API_KEY not set. Lifestyle assessment disabled.")
        return None
    service = WellnessAssessmentService()
    logger.info("[CONFIG] Lifestyle assessment enabled: model=%s", service.model)
    return service


def format_yaml_value(value: str) -> str:
    if not value:
        return ""
    needs_quotes = value[:1].isspace() or value[-1:].isspace()
    if any(marker in value for marker in (":", "#", '"', "'")):
        needs_quotes = True
    if not needs_quotes:
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f"\"{escaped}\""
