import logging
from pathlib import Path
from typing import Tuple

from dbfread import DBF  # type: ignore

logger = logging.getLogger(__name__)


def require_inputs(abor_raw: str, ibor_raw: str) -> Tuple[str, str]:
    """Reject a run where either book is missing before reconciling."""
    abor = (abor_raw or "").strip()
    ibor = (ibor_raw or "").strip()
    if not abor or not ibor:
        raise ValueError("Provide ABOR and IBOR positions (CSV, text or DBF).")
    return abor, ibor


def _dbf_value(value) -> str:
    if value is None:
        return ""
    # Commas inside a field would shift the columns after it
    return str(value).replace(",", " ").strip()


class PositionLoader:
    def __init__(self, abor_path: str, ibor_path: str):
        self.abor_path = abor_path
        self.ibor_path = ibor_path

    def read_abor(self) -> str:
        return self._read(self.abor_path, "ABOR")

    def read_ibor(self) -> str:
        return self._read(self.ibor_path, "IBOR")

    def _read(self, path: str, book: str) -> str:
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"{book} position file not found at {path}")

        if file_path.suffix.lower() == ".dbf":
            text = self._render_dbf(path)
        else:
            text = file_path.read_text(encoding="utf-8")

        logger.info(f"Loaded {book} positions from {file_path.name}")
        return text

    def _render_dbf(self, path: str) -> str:
        # DBF records become a comma-delimited header plus one line per record
        table = DBF(path, load=False)
        lines = [",".join(name.lower() for name in table.field_names)]
        for record in table:
            lines.append(",".join(
                _dbf_value(value)
                for value in record.values()
            ))
        return "\n".join(lines)
