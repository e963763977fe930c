"""Front-matter codec: split, parse and serialize post metadata blocks."""

from datetime import datetime, timezone
from typing import Any, Optional

import yaml

DELIMITER = "---"
CLOSING_DELIMITERS = {"---", "..."}

CANONICAL_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%d %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S %z",
)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class FrontMatterError(ValueError):
    """Raised when a document's metadata block is malformed."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
    ):
        self.message = message
        self.path = path
        self.line = line
        super().__init__(self._format())

    def _format(self) -> str:
        location = self.path or "<document>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self.message}"


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves timestamps as plain strings."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_front_matter(text: str, path: Optional[str] = None) -> tuple[str, str, int]:
    """
    Split a document into its raw metadata block and body.

    Args:
        text: Full document text.
        path: Source path, used only in error messages.

    Returns:
        Tuple of (raw YAML block, body text, 1-based line where body starts)

    Raises:
        FrontMatterError: If the opening or closing delimiter is missing.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip("\r\n").rstrip() != DELIMITER:
        raise FrontMatterError("document does not start with a '---' metadata block", path, 1)

    for index in range(1, len(lines)):
        if lines[index].rstrip("\r\n").rstrip() in CLOSING_DELIMITERS:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return block, body, index + 2

    raise FrontMatterError("metadata block is never closed", path, 1)


def load_metadata(block: str, path: Optional[str] = None) -> dict[str, Any]:
    """Load a raw metadata block into a mapping."""
    try:
        data = yaml.load(block, Loader=FrontMatterLoader)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            # +1 for 1-based lines, +1 for the opening delimiter
            line = mark.line + 2
        raise FrontMatterError(f"invalid YAML in metadata block: {e}", path, line) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"metadata block must be a mapping (got {type(data).__name__})", path, 2
        )
    return data


def parse_date(value: Any) -> datetime:
    """
    Parse a publication date with an explicit UTC offset.

    Accepts the canonical ``YYYY-MM-DD HH:MM:SS +HHMM`` form, the same with a
    colon in the offset, and ISO 8601 with ``T`` separator or ``Z`` suffix.

    Raises:
        ValueError: If the value is empty, unparsable or has no offset.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("date has no explicit UTC offset")
        return value

    if not isinstance(value, str):
        raise ValueError(f"date must be a string (got {type(value).__name__})")

    raw = value.strip()
    if not raw:
        raise ValueError("date is empty")
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+0000"

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue

    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d"):
        try:
            datetime.strptime(raw, fmt)
        except ValueError:
            continue
        raise ValueError(f"date '{value}' has no explicit UTC offset")

    raise ValueError(f"date '{value}' is not a valid date-time")


def format_date(value: datetime) -> str:
    """Format a date in the canonical front-matter form."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    if value.microsecond:
        return value.strftime("%Y-%m-%d %H:%M:%S.%f %z")
    return value.strftime(CANONICAL_DATE_FORMAT)


def normalize_labels(value: Any, unique: bool = False) -> list[str]:
    """
    Normalize a categories/tags value to a list of strings.

    Jekyll accepts either a YAML sequence or a whitespace-separated string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split()
    elif isinstance(value, (list, tuple)):
        items = [str(item).strip() for item in value if item is not None]
    else:
        items = [str(value)]

    items = [item for item in items if item]
    if not unique:
        return items

    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def parse_overlay_filter(value: Any) -> float:
    """Validate an overlay opacity value in [0, 1]."""
    if isinstance(value, bool):
        raise ValueError("overlay_filter must be a number between 0.0 and 1.0")
    try:
        opacity = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("overlay_filter must be a number between 0.0 and 1.0") from exc

    if not (0.0 <= opacity <= 1.0):
        raise ValueError(f"overlay_filter must be between 0.0 and 1.0 (got {opacity})")
    return opacity


def dump_metadata(metadata: dict[str, Any]) -> str:
    """Serialize a metadata mapping to YAML, keeping key order."""
    return yaml.safe_dump(
        metadata,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


def compose_document(metadata: dict[str, Any], body: str = "") -> str:
    """Build a full document from a metadata mapping and body text."""
    block = dump_metadata(metadata) if metadata else ""
    return f"{DELIMITER}\n{block}{DELIMITER}\n{body}"

