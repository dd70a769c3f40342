"""Control directory store: one subdirectory per session under a root."""

import shutil
from collections.abc import Iterator
from pathlib import Path

from ptystore.core.logging_config import get_logger

logger = get_logger(__name__)


class ControlDirectory:
    """Owns the control root and the lifecycle of session subdirectories.

    IDs passed to these methods must already be validated.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        logger.debug("initializing control directory: %s", self._root)
        self.ensure_root()

    @property
    def root(self) -> Path:
        return self._root

    def ensure_root(self) -> Path:
        """Create the control root (and parents) if missing."""
        if not self._root.exists():
            self._root.mkdir(parents=True, exist_ok=True)
            logger.info("control directory created: %s", self._root)
        return self._root

    def session_dir(self, session_id: str) -> Path:
        return self._root / session_id

    def ensure_session_dir(self, session_id: str) -> Path:
        session_dir = self.session_dir(session_id)
        session_dir.mkdir(parents=True, exist_ok=True)
        return session_dir

    def session_dir_exists(self, session_id: str) -> bool:
        return self.session_dir(session_id).is_dir()

    def delete_session_dir(self, session_id: str) -> bool:
        """Recursively delete a session directory.

        Returns:
            True if a directory was removed, False if there was nothing to do.

        Raises:
            OSError: If removal fails part-way.
        """
        session_dir = self.session_dir(session_id)
        if not session_dir.exists():
            return False
        try:
            shutil.rmtree(session_dir)
        except FileNotFoundError:
            # Raced with another remover
            if session_dir.exists():
                raise
            return False
        return True

    def iter_session_dirs(self) -> Iterator[Path]:
        """Yield the immediate subdirectories of the control root.

        Raises:
            OSError: If the root can't be read.
        """
        for entry in self._root.iterdir():
            try:
                if entry.is_dir():
                    yield entry
            except OSError:
                continue
