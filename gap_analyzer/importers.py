"""Import keyword data from JSON or JavaScript module exports."""

import json
import re
from pathlib import Path
from typing import Any

from .models import KeywordRecord
from .parsers import parse_records


EXPORT_PREFIX = re.compile(r"^\s*export\s+(?:const|let|var)\s+\w+\s*=\s*")
TRAILING_COMMA = re.compile(r",(\s*[\]}])")


def import_file(file_path: str | Path) -> list[KeywordRecord]:
    """Import keyword records from a data file.

    Supports plain JSON (`.json`) and JavaScript module exports
    (`export const keywordData = [...]`). Other suffixes are read as
    module text, which also accepts plain JSON.

    Args:
        file_path: Path to the data file

    Returns:
        List of KeywordRecord objects
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Data file not found: {file_path}")

    text = file_path.read_text(encoding="utf-8-sig")
    if not text.strip():
        raise ValueError(f"Empty data file: {file_path}")

    if file_path.suffix.lower() == ".json":
        return import_json_text(text)
    return import_module_text(text)


def import_json_text(text: str) -> list[KeywordRecord]:
    """Parse a JSON array of keyword objects."""
    return parse_records(_require_array(json.loads(text)))


def import_module_text(text: str) -> list[KeywordRecord]:
    """Parse `export const keywordData = [...];` style module text.

    Strips the export statement, a trailing semicolon and trailing commas
    before parsing the remaining array as JSON.
    """
    return parse_records(_require_array(json.loads(clean_module_text(text))))


def clean_module_text(text: str) -> str:
    """Reduce JavaScript module text to a JSON document."""
    cleaned = EXPORT_PREFIX.sub("", text.strip(), count=1)
    cleaned = cleaned.rstrip().rstrip(";")
    cleaned = TRAILING_COMMA.sub(r"\1", cleaned)
    return cleaned.strip()


def _require_array(data: Any) -> list[dict[str, Any]]:
    if not isinstance(data, list):
        raise ValueError("Data is not an array of keyword objects")
    return data
