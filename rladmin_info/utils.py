"""Utility functions for rladmin Info CLI."""

import logging
from pathlib import Path
from typing import List


# Valid section names (CLI parameter format with hyphens)
VALID_SECTIONS = [
    "nodes",
    "databases",
    "shards",
    "endpoints",
    "databases-with-nodes",
]

# Sections written for "all"
DEFAULT_SECTIONS = ["nodes", "databases", "shards", "endpoints"]

VALID_OUTPUT_FORMATS = ["json", "csv", "markdown"]

# Output format -> file extension
FORMAT_EXTENSIONS = {
    "json": "json",
    "csv": "csv",
    "markdown": "md",
}


def ensure_output_dir(path: str) -> str:
    """Ensure output directory exists.

    Args:
        path: Output file path or directory path

    Returns:
        Absolute path with directory created
    """
    path_obj = Path(path)

    # If path is a directory or ends with /, ensure it exists
    if path.endswith("/") or path_obj.is_dir():
        path_obj.mkdir(parents=True, exist_ok=True)
        return str(path_obj.absolute())

    # If path is a file, ensure parent directory exists
    parent_dir = path_obj.parent
    parent_dir.mkdir(parents=True, exist_ok=True)
    return str(path_obj.absolute())


def parse_sections(section_str: str) -> List[str]:
    """Parse section parameter string.

    Args:
        section_str: Comma-separated section names or "all"

    Returns:
        List of section names, in the order given

    Raises:
        ValueError: If invalid section names are provided
    """
    if section_str.strip().lower() == "all":
        return list(DEFAULT_SECTIONS)

    sections = [s.strip().lower() for s in section_str.split(",") if s.strip()]
    invalid_sections = [s for s in sections if s not in VALID_SECTIONS]

    if invalid_sections or not sections:
        raise ValueError(
            f"無效的區段名稱：{', '.join(invalid_sections) or section_str}。\n"
            f"有效區段：all, {', '.join(VALID_SECTIONS)}"
        )

    return sections


def parse_output_format(output_format: str) -> str:
    """Validate the output format option.

    Raises:
        ValueError: If the format is not supported
    """
    value = output_format.strip().lower()
    if value not in VALID_OUTPUT_FORMATS:
        raise ValueError(
            f"無效的輸出格式 '{output_format}'。有效格式：{', '.join(VALID_OUTPUT_FORMATS)}"
        )
    return value


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Setup logger with appropriate level.

    Args:
        verbose: Enable DEBUG level logging

    Returns:
        Configured logger
    """
    logger = logging.getLogger("rladmin_info")

    # Set level
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # Create console handler (stderr)
    handler = logging.StreamHandler()
    handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)

    return logger
