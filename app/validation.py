from app.errors import ConfigError

MAX_TAB_WIDTH = 16


def validate_tab_width(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"tab_width must be an integer, got {value!r}")
    if not 1 <= value <= MAX_TAB_WIDTH:
        raise ConfigError(f"tab_width must be between 1 and {MAX_TAB_WIDTH}, got {value}")
    return value


def validate_metric(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return float(value)
