"""
Parsers for the file based data sources (YAML and JSON).

Both formats hold a top-level list of records shaped like:

    - path: /some-path
      url: https://www.some-url.com/demo

Each parser returns the records as RouteEntry objects, in file order.
"""

import json
import logging
from datetime import date
from typing import Any, Callable, List, Optional

import yaml
from pydantic import ValidationError

from errors import FormatError, SourceIOError
from models import RouteEntry, SourceKind

logger = logging.getLogger(__name__)

# Suffix checked against the lower-cased data file location
SUFFIXES = {
    ".yaml": SourceKind.YAML,
    ".json": SourceKind.JSON,
    ".db": SourceKind.DATABASE,
}


def detect_source_kind(location: str) -> SourceKind:
    """
    Work out which parser handles a data file location

    Args:
        location (str): Path of the data file

    Returns:
        SourceKind: The matching kind, or SourceKind.UNSUPPORTED
    """
    normalized = location.lower()
    for suffix, kind in SUFFIXES.items():
        if normalized.endswith(suffix):
            return kind
    return SourceKind.UNSUPPORTED


def read_file(file_path: str, format_name: str) -> bytes:
    """Read the raw bytes of a data file"""
    try:
        with open(file_path, 'rb') as f:
            return f.read()
    except OSError as e:
        logger.error(f"Error opening {format_name} file {file_path}: {e}")
        raise SourceIOError(file_path, f"open {format_name} file", e) from e


def yaml_record(record: Any) -> Any:
    """Read scalar path/url values (numbers, booleans, dates) as their text"""
    if not isinstance(record, dict):
        return record
    record = dict(record)
    for key in ("path", "url"):
        value = record.get(key)
        if isinstance(value, bool):
            record[key] = "true" if value else "false"
        elif isinstance(value, (int, float, date)):
            record[key] = str(value)
    return record


def json_record(record: Any) -> Any:
    """Match object keys case-insensitively, so "Path" and "URL" are accepted"""
    if not isinstance(record, dict):
        return record
    return {key.lower() if isinstance(key, str) else key: value for key, value in record.items()}


def to_entries(data: Any, file_path: str, format_name: str,
               normalize: Optional[Callable[[Any], Any]] = None) -> List[RouteEntry]:
    """
    Convert a decoded document into RouteEntry objects

    Args:
        data: The decoded document, expected to be a list of mappings
        file_path (str): Path of the data file, used in error messages
        format_name (str): "yaml" or "json"
        normalize: Optional per-record rewrite applied before validation

    Returns:
        list: RouteEntry objects in document order
    """
    operation = f"unmarshal {format_name} data of"

    # An empty document decodes to None and holds no routes
    if data is None:
        return []

    if not isinstance(data, list):
        cause = ValueError(f"expected a list of records, got {type(data).__name__}")
        logger.error(f"Error decoding {format_name} file {file_path}: {cause}")
        raise FormatError(file_path, operation, cause)

    entries = []
    for index, record in enumerate(data):
        if normalize is not None:
            record = normalize(record)
        try:
            entries.append(RouteEntry.model_validate(record))
        except ValidationError as e:
            logger.error(f"Invalid record #{index} in {format_name} file {file_path}: {e}")
            raise FormatError(file_path, operation, e) from e
    return entries


def parse_yaml(file_path: str) -> List[RouteEntry]:
    """
    Parse a YAML data file

    Args:
        file_path (str): Path of the YAML file

    Returns:
        list: RouteEntry objects in file order

    Raises:
        SourceIOError: The file cannot be read
        FormatError: The content is not a YAML list of path/url records
    """
    content = read_file(file_path, "yaml")
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.error(f"Error decoding yaml file {file_path}: {e}")
        raise FormatError(file_path, "unmarshal yaml data of", e) from e
    return to_entries(data, file_path, "yaml", yaml_record)


def parse_json(file_path: str) -> List[RouteEntry]:
    """
    Parse a JSON data file

    Args:
        file_path (str): Path of the JSON file

    Returns:
        list: RouteEntry objects in file order

    Raises:
        SourceIOError: The file cannot be read
        FormatError: The content is not a JSON array of path/url objects
    """
    content = read_file(file_path, "json")
    try:
        data = json.loads(content)
    except ValueError as e:
        logger.error(f"Error decoding json file {file_path}: {e}")
        raise FormatError(file_path, "unmarshal json data of", e) from e
    return to_entries(data, file_path, "json", json_record)
