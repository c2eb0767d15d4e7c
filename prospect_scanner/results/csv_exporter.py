from collections.abc import Sequence
from pathlib import Path

from prospect_scanner.logging.logger import Log
from prospect_scanner.session.models import PROSPECT_FIELDS, Prospect

DEFAULT_FILENAME = "prospects.csv"

_NEEDS_QUOTING = (",", '"', "\n")


def escape_field(value: str | None) -> str:
    """Quote a field only when it holds a comma, a double quote or a newline."""
    text = value or ""
    if any(ch in text for ch in _NEEDS_QUOTING):
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(records: Sequence[Prospect]) -> str:
    """Serialize prospects with a fixed header row; lines joined by ``\\n``."""
    lines = [",".join(f.header for f in PROSPECT_FIELDS)]
    for record in records:
        lines.append(",".join(escape_field(getattr(record, f.attribute)) for f in PROSPECT_FIELDS))
    return "\n".join(lines)


class CsvExporter:
    """Writes the aggregated table to a CSV file."""

    def __init__(self, filename: str = DEFAULT_FILENAME) -> None:
        self._filename = filename

    def export(
        self,
        records: Sequence[Prospect],
        directory: Path,
        filename: str | None = None,
    ) -> Path | None:
        """Write ``records`` as UTF-8 CSV into ``directory``.

        Returns:
            Path of the written file, or None when there was nothing to export.
        """
        if not records:
            Log.warning("No prospects to export")
            return None
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (filename or self._filename)
        path.write_text(to_csv(records), encoding="utf-8")
        Log.info(f"Exported {len(records)} prospects to {path}")
        return path
