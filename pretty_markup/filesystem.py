"""Reading and rewriting the files handed to the formatter."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, LANGUAGE_EXTENSIONS

MAX_FILE_SIZE_ENV_VAR = "PRETTY_MARKUP_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum size of a file the formatter will read.

    Args:
        default: Limit in bytes used when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["PRETTY_MARKUP_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        raise ValueError(
            f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {env_value!r}"
        ) from error

    if max_size <= 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}")
    return max_size


def detect_language(path: Path) -> str:
    """Infer the formatter language from a file extension.

    Raises:
        ValueError: If the extension is not associated with a language.

    Examples:
        detect_language(Path("query.sql"))  # "sql"
    """
    language = LANGUAGE_EXTENSIONS.get(path.suffix.lower())
    if language is None:
        raise ValueError(
            f"Cannot infer the language of {path.name}. Pass --language or use one "
            f"of: {', '.join(LANGUAGE_EXTENSIONS)}"
        )
    return language


def _is_symlink(path: Path) -> bool:
    try:
        return path.is_symlink()
    except OSError:
        return False


def contains_symlink(path: Path) -> bool:
    """Check whether a path or any of its parent directories is a symlink."""
    return any(_is_symlink(candidate) for candidate in (path, *path.parents))


def normalize_filepath(raw_path: str) -> Path:
    """Resolve the path of a file to format.

    Args:
        raw_path: User-supplied path (absolute or relative).

    Returns:
        Path: Absolute path to the file.

    Raises:
        ValueError: If the path is missing, is not a regular file, or goes
            through a symlink.

    Examples:
        normalize_filepath("queries/report.sql")
    """
    path = Path(raw_path).expanduser()
    if contains_symlink(path):
        raise ValueError(f"Symlinks are not supported for security reasons: {path}")

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        raise ValueError(f"{path} does not exist.") from error
    except OSError as error:
        raise ValueError(f"Error resolving {path}: {error}") from error

    if not resolved.is_file():
        raise ValueError(f"{resolved} is not a regular file.")
    return resolved


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat a file without following symlinks and require a regular file.

    Raises:
        IOError: If the file cannot be stat'ed or is not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Error accessing {filepath}: {error}") from error

    # Symlinks, FIFOs, sockets and devices all fail this check
    if not stat.S_ISREG(stat_result.st_mode):
        raise IOError(f"{filepath} is not a regular file.")
    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Raise IOError if the file is larger than `max_size` bytes."""
    if stat_result.st_size > max_size:
        raise IOError(f"{filepath} exceeds the maximum allowed size of {max_size} bytes.")


def fingerprint(stat_result: os.stat_result) -> tuple:
    """Identity and version of a file: inode, device, size and mtime."""
    return (
        getattr(stat_result, "st_ino", None),
        getattr(stat_result, "st_dev", None),
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Raise IOError if the file was replaced or modified between two stats."""
    if fingerprint(expected_stat) != fingerprint(current_stat):
        raise IOError(f"{filepath} changed during processing; refusing to overwrite.")


def read_source(filepath: Path) -> str:
    """Read a file to format as UTF-8 text.

    Raises:
        IOError: If the file cannot be opened or is not valid UTF-8.

    Examples:
        content = read_source(Path("feed.xml"))
    """
    try:
        return filepath.read_text(encoding="UTF-8")
    except UnicodeDecodeError as error:
        raise IOError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except OSError as error:
        raise IOError(f"Error reading {filepath}: {error}") from error


def write_formatted(filepath: Path, content: str, expected_stat: os.stat_result):
    """Replace a file's content with its formatted version.

    The text goes to a temporary file in the same directory, which is then
    renamed over the original, so readers never see a half-written file. The
    original permission bits are kept.

    Args:
        filepath: Path to the file to rewrite.
        content: Formatted text to write.
        expected_stat: Stat taken before reading, used to detect concurrent edits.

    Raises:
        IOError: If the file changed since it was read or cannot be replaced.

    Examples:
        write_formatted(Path("feed.xml"), pretty, initial_stat)
    """
    ensure_file_unchanged(expected_stat, collect_file_stat(filepath), filepath)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", dir=filepath.parent, prefix=".pretty-markup-", delete=False
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_path, stat.S_IMODE(expected_stat.st_mode))
        os.replace(temp_path, filepath)
        temp_path = None
    except OSError as error:
        raise IOError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
