"""Environment-variable-based configuration."""

import os
from pathlib import Path


def get_root_dir() -> Path:
    """Return the directory to index from LFS_ROOT_DIR."""
    raw = os.environ.get("LFS_ROOT_DIR", "~/Downloads")
    return Path(raw).expanduser()


def get_log_level() -> str:
    """Return the logging level from LFS_LOG_LEVEL."""
    return os.environ.get("LFS_LOG_LEVEL", "WARNING")


def get_max_file_size() -> int:
    """Return the largest file (bytes) whose text is extracted, from LFS_MAX_FILE_SIZE."""
    return int(os.environ.get("LFS_MAX_FILE_SIZE", str(20 * 1024 * 1024)))


def get_snippet_context() -> int:
    """Return the default snippet context size in characters from LFS_SNIPPET_CONTEXT."""
    return int(os.environ.get("LFS_SNIPPET_CONTEXT", "60"))


def get_max_snippets() -> int:
    """Return the default number of snippets per result from LFS_MAX_SNIPPETS."""
    return int(os.environ.get("LFS_MAX_SNIPPETS", "3"))


def get_fuzzy_threshold() -> float:
    """Return the fuzzy filename distance threshold from LFS_FUZZY_THRESHOLD."""
    return float(os.environ.get("LFS_FUZZY_THRESHOLD", "0.4"))


def is_build_on_start() -> bool:
    """Return True unless LFS_BUILD_ON_START is set to FALSE."""
    return os.environ.get("LFS_BUILD_ON_START", "TRUE").upper() != "FALSE"


def is_representative_matches() -> bool:
    """Return True unless LFS_REPRESENTATIVE_MATCHES is set to FALSE."""
    return os.environ.get("LFS_REPRESENTATIVE_MATCHES", "TRUE").upper() != "FALSE"
