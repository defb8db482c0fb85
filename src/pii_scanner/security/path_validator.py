"""Path traversal and system-path exposure guards.

Every function in this module is total: it always returns a
:class:`PathValidationResult` (or a string for :func:`sanitize_path`) and
never raises, so callers can show the error message to end users as is.

Each accepting branch canonicalizes the path before any security decision
is taken.  A path whose canonical form differs from the input beyond case
and a trailing separator is rejected outright: the divergence means the
input relied on relative references or alternate spellings.

Example
-------
>>> validate_file_name("rapport_2024.xlsx").ok
True
>>> ok, error = validate_file_name("CON.txt")
>>> ok, error
(False, 'File name uses a reserved system device name')
>>> sanitize_path("  /data//clients/../export ")
'/data/clients/export'
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)

MAX_FILE_NAME_LENGTH = 255
MAX_PATH_LENGTH = 32767

# Substrings rejected anywhere in a raw path.
DANGEROUS_PATTERNS: tuple[str, ...] = (
    "..",
    "~",
    "%",
    "\\\\",
    "//",
)

SENSITIVE_SYSTEM_PATHS: tuple[str, ...] = (
    "C:\\Windows",
    "C:\\Program Files",
    "C:\\Program Files (x86)",
    "C:\\ProgramData",
    "C:\\Users\\All Users",
    "C:\\Users\\Default",
    "C:\\System Volume Information",
    "/etc",
    "/var",
    "/usr",
    "/bin",
    "/sbin",
    "/boot",
    "/sys",
    "/proc",
)

RESERVED_DEVICE_NAMES: frozenset[str] = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

_CONTROL_CHARACTERS = frozenset(chr(code) for code in range(32))
_INVALID_PATH_CHARACTERS = frozenset("<>|") | _CONTROL_CHARACTERS
_INVALID_FILE_NAME_CHARACTERS = frozenset('<>:"/\\|?*') | _CONTROL_CHARACTERS
_SEPARATOR = re.compile(r"[/\\]")
_SEPARATOR_RUN = re.compile(r"[/\\]{2,}")


@dataclass(frozen=True)
class PathValidationResult:
    """Outcome of a path check.

    Unpacks as ``(ok, error_message)`` and is truthy only when accepted.

    Attributes
    ----------
    ok:
        ``True`` when the path is accepted and safe to use.
    error_message:
        Reason for the rejection; empty when accepted.
    path:
        Canonical absolute path when accepted, ``None`` otherwise.
    """

    ok: bool
    error_message: str = ""
    path: str | None = None

    @classmethod
    def accepted(cls, path: str | None = None) -> "PathValidationResult":
        return cls(ok=True, error_message="", path=path)

    @classmethod
    def rejected(cls, error_message: str) -> "PathValidationResult":
        return cls(ok=False, error_message=error_message, path=None)

    def __iter__(self) -> Iterator[object]:
        yield self.ok
        yield self.error_message

    def __bool__(self) -> bool:
        return self.ok


class ResolvedPathResult(PathValidationResult):
    """Outcome of a path resolution.

    Unpacks as ``(path, error_message)``: the path is ``None`` when the
    resolution was rejected.
    """

    def __iter__(self) -> Iterator[object]:
        yield self.path
        yield self.error_message


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _canonicalize(path: str) -> str:
    return os.path.normpath(os.path.abspath(path))


def _strip_trailing_separators(path: str) -> str:
    stripped = path.rstrip("\\/")
    return stripped if stripped else path[:1]


def _comparable(path: str) -> str:
    """Separator-unified form used for prefix checks."""
    return os.path.normcase(path).replace("\\", "/").rstrip("/")


def _is_within(path: str, base: str) -> bool:
    candidate = _comparable(path)
    root = _comparable(base)
    return candidate.startswith(root + "/")


def _is_sensitive(canonical: str) -> bool:
    candidate = canonical.replace("\\", "/").rstrip("/").lower()
    for sensitive in SENSITIVE_SYSTEM_PATHS:
        prefix = sensitive.replace("\\", "/").lower()
        if candidate == prefix or candidate.startswith(prefix + "/"):
            return True
    return False


def _find_dangerous_pattern(path: str) -> str | None:
    for pattern in DANGEROUS_PATTERNS:
        if pattern in path:
            return pattern
    return None


def _canonical_or_error(path: str) -> tuple[str | None, str]:
    """Canonicalize *path* and require it to match the input.

    Returns ``(canonical, "")`` on success, ``(None, error)`` otherwise.
    """
    try:
        canonical = _canonicalize(path)
    except (OSError, TypeError, ValueError) as exc:
        return None, f"Path is not valid: {exc}"

    original = _strip_trailing_separators(path).lower()
    resolved = _strip_trailing_separators(canonical).lower()
    if original != resolved:
        return None, "Path contains dangerous relative references"
    return canonical, ""


def is_network_path(path: str) -> bool:
    """Return ``True`` for UNC paths (``\\\\server\\share`` or ``//server/share``)."""
    return bool(path) and (path.startswith("\\\\") or path.startswith("//"))


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_file_name(file_name: str) -> PathValidationResult:
    """Validate a bare file name (no directory part).

    Parameters
    ----------
    file_name:
        Name to check, e.g. ``"rapport.csv"``.

    Returns
    -------
    PathValidationResult
        Accepted results carry no path.
    """
    if not file_name or not file_name.strip():
        return PathValidationResult.rejected("File name cannot be empty")

    if ".." in file_name or "/" in file_name or "\\" in file_name:
        return PathValidationResult.rejected(
            "File name contains directory navigation characters"
        )

    if any(char in _INVALID_FILE_NAME_CHARACTERS for char in file_name):
        return PathValidationResult.rejected("File name contains invalid characters")

    if len(file_name) > MAX_FILE_NAME_LENGTH:
        return PathValidationResult.rejected(
            f"File name is too long (max {MAX_FILE_NAME_LENGTH} characters)"
        )

    stem = os.path.splitext(file_name)[0].upper()
    if stem in RESERVED_DEVICE_NAMES or file_name.upper() in RESERVED_DEVICE_NAMES:
        return PathValidationResult.rejected("File name uses a reserved system device name")

    return PathValidationResult.accepted()


def validate_directory_path(directory_path: str, must_exist: bool = True) -> PathValidationResult:
    """Validate an absolute directory path before it is used for I/O.

    Parameters
    ----------
    directory_path:
        Raw, caller-supplied directory path.
    must_exist:
        When ``True``, the canonical path must be an existing directory.

    Returns
    -------
    PathValidationResult
        Accepted results carry the canonical path.
    """
    if not directory_path or not directory_path.strip():
        return PathValidationResult.rejected("Directory path cannot be empty")

    pattern = _find_dangerous_pattern(directory_path)
    if pattern is not None:
        return PathValidationResult.rejected(f"Path contains a dangerous pattern: {pattern}")

    if any(char in _INVALID_PATH_CHARACTERS for char in directory_path):
        return PathValidationResult.rejected("Path contains invalid characters")

    canonical, error = _canonical_or_error(directory_path)
    if canonical is None:
        return PathValidationResult.rejected(error)

    if _is_sensitive(canonical):
        logger.debug("Rejected system directory %s", canonical)
        return PathValidationResult.rejected("Access to system directories is forbidden")

    if len(canonical) > MAX_PATH_LENGTH:
        return PathValidationResult.rejected("Path is too long")

    if must_exist and not os.path.isdir(canonical):
        return PathValidationResult.rejected("Directory does not exist")

    return PathValidationResult.accepted(canonical)


def validate_file_path(file_path: str, must_exist: bool = True) -> PathValidationResult:
    """Validate an absolute file path before it is opened.

    Parameters
    ----------
    file_path:
        Raw, caller-supplied file path.
    must_exist:
        When ``True``, the canonical path must be an existing file.

    Returns
    -------
    PathValidationResult
        Accepted results carry the canonical path.
    """
    if not file_path or not file_path.strip():
        return PathValidationResult.rejected("File path cannot be empty")

    pattern = _find_dangerous_pattern(file_path)
    if pattern is not None:
        return PathValidationResult.rejected(f"Path contains a dangerous pattern: {pattern}")

    if any(char in _INVALID_PATH_CHARACTERS for char in file_path):
        return PathValidationResult.rejected("Path contains invalid characters")

    canonical, error = _canonical_or_error(file_path)
    if canonical is None:
        return PathValidationResult.rejected(error)

    name_result = validate_file_name(os.path.basename(canonical))
    if not name_result.ok:
        return name_result

    parent = os.path.dirname(canonical)
    if not parent:
        return PathValidationResult.rejected("Cannot determine the parent directory")

    if _is_sensitive(parent):
        logger.debug("Rejected file under system directory %s", canonical)
        return PathValidationResult.rejected("Access to system directories is forbidden")

    if len(canonical) > MAX_PATH_LENGTH:
        return PathValidationResult.rejected("Path is too long")

    if must_exist and not os.path.isfile(canonical):
        return PathValidationResult.rejected("File does not exist")

    return PathValidationResult.accepted(canonical)


def validate_file_in_directory(file_path: str, allowed_directory: str) -> PathValidationResult:
    """Validate that *file_path* lies inside *allowed_directory*.

    Both paths are validated independently (existence is not required),
    then the canonical file path must be a descendant of the canonical
    directory.  ``/data`` does not contain ``/database/x``.

    Returns
    -------
    PathValidationResult
        Accepted results carry the canonical file path.
    """
    file_result = validate_file_path(file_path, must_exist=False)
    if not file_result.ok:
        return file_result

    directory_result = validate_directory_path(allowed_directory, must_exist=False)
    if not directory_result.ok:
        return directory_result

    if not _is_within(file_result.path or "", directory_result.path or ""):
        return PathValidationResult.rejected("File is not inside the allowed directory")

    return PathValidationResult.accepted(file_result.path)


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


def sanitize_path(path: str) -> str:
    """Best-effort cleanup of a path string.

    Trims whitespace, removes ``..`` tokens and collapses separator runs.
    The result is advisory only and still has to go through the
    ``validate_*`` functions before use.  Applying it twice gives the same
    result as applying it once.
    """
    if not path or not path.strip():
        return ""

    current = path
    while True:
        cleaned = current.strip()
        while ".." in cleaned:
            cleaned = cleaned.replace("..", "")
        cleaned = _SEPARATOR_RUN.sub(lambda _: os.sep, cleaned)
        if cleaned == current:
            return cleaned
        current = cleaned


def get_safe_absolute_path(relative_path: str, base_path: str) -> ResolvedPathResult:
    """Resolve *relative_path* under *base_path* without escaping it.

    Backslashes are treated as separators on every platform, so
    ``..\\..\\secret`` climbs out of the base on POSIX hosts too.

    Returns
    -------
    ResolvedPathResult
        Unpacks as ``(path, error_message)``.  Accepted results carry the
        canonical absolute path; rejected results carry no path.
    """
    try:
        relative = (relative_path or "").replace("\\", "/")
        base = base_path.replace("\\", "/") if os.sep == "/" else base_path

        if _SEPARATOR.split(os.path.normpath(relative))[0] == "..":
            return ResolvedPathResult(ok=False, error_message="Path resolves outside base directory")

        resolved = _canonicalize(os.path.join(base, relative))
        normalized_base = _canonicalize(base)
    except (OSError, TypeError, ValueError, AttributeError) as exc:
        return ResolvedPathResult(ok=False, error_message=f"Failed to resolve path: {exc}")

    if not _is_within(resolved, normalized_base) and _comparable(resolved) != _comparable(normalized_base):
        return ResolvedPathResult(ok=False, error_message="Path resolves outside base directory")

    return ResolvedPathResult(ok=True, path=resolved)
