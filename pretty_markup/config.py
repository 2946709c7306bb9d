"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

DEPTH_OVERFLOW_POLICIES = ("clamp", "error")
# Deepest level an indentation table may precompute
MAX_DEPTH_LIMIT = 1000


@dataclass
class FormatterConfig:
    """Configuration for the pretty-print and minify formatters.

    Attributes:
        indent_chars: Indentation unit added per nesting level.
        indent_spaces: Number of spaces used as the indentation unit; takes
            precedence over `indent_chars` when set.
        max_depth: Deepest nesting level with a precomputed indentation string.
        depth_overflow: What to do when nesting exceeds `max_depth`:
            ``"clamp"`` reuses the deepest indentation, ``"error"`` raises
            `DepthExceededError`.
        preserve_comments: Whether the XML and CSS minifiers keep comments.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        FormatterConfig(indent_spaces=4, depth_overflow="error")
    """

    # Indentation
    indent_chars: str = "  "
    indent_spaces: int | None = None
    max_depth: int = 100
    depth_overflow: str = "clamp"

    # Minification
    preserve_comments: bool = False

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_depth` must be a positive integer")
    """


def load_config(search_path: Path) -> FormatterConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.pretty-markup]`` table from `pyproject.toml` and the
    ``[pretty-markup]`` or ``[tool.pretty-markup]`` table from
    `.pretty-markup.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        FormatterConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a matching table is present but is not a mapping or
            contains unsupported keys.

    Examples:
        load_config(Path("queries"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "pretty-markup")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".pretty-markup.toml",
            table_paths=[("pretty-markup",), ("tool", "pretty-markup")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return FormatterConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> FormatterConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> FormatterConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return FormatterConfig()

    # TOML keys are written with dashes or underscores interchangeably
    options = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return FormatterConfig(**options)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: FormatterConfig) -> FormatterConfig:
    indent_chars = config.indent_chars
    if config.indent_spaces is not None:
        _ensure_integers({"indent_spaces": config.indent_spaces})
        if config.indent_spaces <= 0:
            raise ConfigError("`indent_spaces` must be a positive integer")
        indent_chars = " " * config.indent_spaces

    depth_overflow = config.depth_overflow
    if isinstance(depth_overflow, str):
        depth_overflow = depth_overflow.lower()

    return replace(config, indent_chars=indent_chars, depth_overflow=depth_overflow)


def validate_config(config: FormatterConfig) -> None:
    """Validate a `FormatterConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the indentation unit is empty, the overflow policy is
            unknown, numeric limits are non-positive, or `max_depth` exceeds
            `MAX_DEPTH_LIMIT`.

    Examples:
        validate_config(FormatterConfig(max_depth=50))
    """
    config = normalize_config(config)

    _ensure_integers(
        {
            "max_depth": config.max_depth,
            "max_file_size": config.max_file_size,
            **({"indent_spaces": config.indent_spaces} if config.indent_spaces is not None else {}),
        }
    )

    if not isinstance(config.indent_chars, str) or not config.indent_chars:
        raise ConfigError("`indent_chars` must not be empty")
    if config.depth_overflow not in DEPTH_OVERFLOW_POLICIES:
        raise ConfigError("`depth_overflow` must be one of: clamp, error")
    if not isinstance(config.preserve_comments, bool):
        raise ConfigError("`preserve_comments` must be a boolean")

    _ensure_positive(
        {
            "max_depth": config.max_depth,
            "max_file_size": config.max_file_size,
        }
    )
    if config.max_depth > MAX_DEPTH_LIMIT:
        raise ConfigError(f"`max_depth` must not exceed {MAX_DEPTH_LIMIT}")


def apply_overrides(config: FormatterConfig, **overrides: object) -> FormatterConfig:
    """Apply override values to a `FormatterConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        FormatterConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `FormatterConfig`.

    Examples:
        updated = apply_overrides(config, indent_spaces=4, depth_overflow="error")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "indent_chars" in changes and "indent_spaces" not in changes:
        changes["indent_spaces"] = None
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> FormatterConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        FormatterConfig: Validated configuration ready for formatting.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), indent_spaces=4)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
