from datetime import date
from pathlib import Path

from shelter.entities import EntityType
from shelter.processor.exceptions import SourceFileError


def export_file_path(export_dir: Path, entity: EntityType, day: date) -> Path:
    """Build path to an export file: {export_dir}/{entity}_export_{YYYY-MM-DD}.csv"""
    return export_dir / entity.export_filename(day.isoformat())


class CsvFileLoader:
    """Reads CSV text from disk and writes exports back."""

    ENCODING = "utf-8"

    def load(self, path: Path) -> str:
        """Read a UTF-8 CSV file, tolerating a spreadsheet byte-order mark.

        Raises:
            SourceFileError: if the file is missing, unreadable or not UTF-8.
        """
        if not path.is_file():
            raise SourceFileError(f"File not found: {path}")
        try:
            return path.read_bytes().decode("utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceFileError(f"Cannot read {path}: {exc}") from exc

    def write(self, path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding=self.ENCODING, newline="")
        return path
