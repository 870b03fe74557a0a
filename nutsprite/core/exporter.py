"""
Asset Exporter - Writes encoded assets to disk

Writes are atomic: the text goes to a temporary file in the destination
directory and is moved over the target only once it is complete.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path

from .errors import SinkError

logger = logging.getLogger(__name__)


class AssetExporter:
    """Exports encoded text assets"""

    ENCODING = 'utf-8'

    @staticmethod
    def _target_mode(path: Path) -> int:
        """Mode the written file should end up with: the existing target's, else umask-derived"""
        try:
            return stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask

    @classmethod
    def to_text(cls, text: str, path) -> Path:
        """Write text to path in one atomic step"""
        path = Path(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SinkError(f"Cannot create output directory {path.parent}: {e}") from e

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                'w',
                encoding=cls.ENCODING,
                newline='',
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix='.tmp',
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(tmp_name, cls._target_mode(path))
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise SinkError(f"Cannot write {path}: {e}") from e

        logger.info("Wrote %d characters to %s", len(text), path)
        return path
