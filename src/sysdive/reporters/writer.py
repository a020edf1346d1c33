"""Report file output."""

import logging
import tempfile
from pathlib import Path

from sysdive.errors import ReportWriteError

logger = logging.getLogger(__name__)

DEFAULT_REPORT_NAME = "full_pc_report.txt"


def write_report(report: str, path: Path) -> Path:
    """Write the report as UTF-8, replacing any previous file.

    The text goes to a temporary file beside the target, which is then
    renamed over it, so a failed write leaves the previous report untouched.
    Characters that cannot be encoded (undecodable mount paths surface as
    lone surrogates) are written as ``?``.

    Args:
        report: Rendered report text.
        path: Destination file; parent directories are created.

    Returns:
        Absolute path of the written file.

    Raises:
        ReportWriteError: If the file cannot be written.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with open(fd, "w", encoding="utf-8", errors="replace") as f:
                f.write(report)
            tmp_path.replace(path)
        except Exception:
            tmp_path.unlink(missing_ok=True)
            raise
    except OSError as e:
        raise ReportWriteError(f"Could not write report to {path}: {e}") from e

    logger.debug(f"Wrote {len(report)} characters to {path}")
    return path.resolve()
