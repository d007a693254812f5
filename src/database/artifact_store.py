"""
Artifact sinks for published catalog files.

``LocalDirectorySink`` writes to a directory (the one served under
``/downloads``). Every artifact is staged to a temporary file first. Files
being replaced are kept as backups until all new files are in place, and are
restored if any move fails, so the directory holds either the previous set or
the new one. ``InMemorySink`` keeps artifacts in a dict for local development
and tests.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

from src.integrations.contracts.catalog import SinkWriteError

logger = logging.getLogger(__name__)


class LocalDirectorySink:
    def __init__(self, output_dir: Union[str, Path]) -> None:
        self.output_dir = Path(output_dir)

    def publish(self, artifacts: Dict[str, bytes]) -> List[str]:
        staged: Dict[str, Path] = {}
        backups: Dict[str, Path] = {}
        moved: List[str] = []
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            for name, data in artifacts.items():
                tmp_path = self.output_dir / f".{name}.tmp"
                tmp_path.write_bytes(data)
                staged[name] = tmp_path
            for name, tmp_path in staged.items():
                target = self.output_dir / name
                if target.exists():
                    backup = self.output_dir / f".{name}.bak"
                    os.replace(target, backup)
                    backups[name] = backup
                os.replace(tmp_path, target)
                moved.append(name)
        except OSError as exc:
            self._rollback(staged, backups, moved)
            logger.error("Failed to publish artifacts to %s: %s", self.output_dir, exc)
            raise SinkWriteError(f"Could not write artifacts to {self.output_dir}: {exc}") from exc

        for backup in backups.values():
            backup.unlink(missing_ok=True)
        logger.info("Published %d artifacts to %s", len(staged), self.output_dir)
        return list(staged)

    def _rollback(self, staged: Dict[str, Path], backups: Dict[str, Path], moved: List[str]) -> None:
        for name in moved:
            if name not in backups:
                self._discard(self.output_dir / name)
        for name, backup in backups.items():
            try:
                os.replace(backup, self.output_dir / name)
            except OSError as exc:
                logger.error("Could not restore %s from %s: %s", name, backup, exc)
        for tmp_path in staged.values():
            self._discard(tmp_path)

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove %s: %s", path, exc)

    def path_for(self, name: str) -> Optional[Path]:
        path = self.output_dir / name
        return path if path.is_file() else None


class InMemorySink:
    def __init__(self) -> None:
        self._artifacts: Dict[str, bytes] = {}

    def publish(self, artifacts: Dict[str, bytes]) -> List[str]:
        self._artifacts = dict(artifacts)
        return list(artifacts)

    def get(self, name: str) -> Optional[bytes]:
        return self._artifacts.get(name)

    def path_for(self, name: str) -> Optional[Path]:
        # Nothing is on disk in this implementation.
        return None
