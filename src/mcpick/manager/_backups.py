"""Timestamped snapshots of the user-scope servers, capped at MAX_BACKUPS."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from ..errors import BackupNotFoundError
from ..paths import backup_filename, parse_backup_filename
from ..validation import parse_live_config
from ._adapters import _atomic_write, read_json_document

if TYPE_CHECKING:
    from ..models.config import LiveConfig
    from ._reconciler import ConfigReconciler

logger = logging.getLogger(__name__)

MAX_BACKUPS = 10


@dataclass(frozen=True)
class BackupRecord:
    filename: str
    timestamp: datetime
    path: Path


class BackupManager:
    def __init__(
        self,
        backups_dir: Path,
        reconciler: ConfigReconciler,
        keep: int = MAX_BACKUPS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._dir = Path(backups_dir)
        self._reconciler = reconciler
        self._keep = keep
        self._clock = clock

    def create(self) -> BackupRecord:
        """Snapshot the enabled user servers, then prune old snapshots."""
        config = self._reconciler.read_enabled("user")
        now = self._clock().replace(microsecond=0)
        # Names resolve to the second; a taken name moves to the next free second.
        while (self._dir / backup_filename(now)).exists():
            now += timedelta(seconds=1)
        filename = backup_filename(now)
        path = self._dir / filename
        _atomic_write(path, json.dumps({"mcpServers": config.entries()}, indent=2))
        logger.debug("Backed up %d server(s) to %s", len(config.mcp_servers), path)
        self.prune()
        return BackupRecord(filename=filename, timestamp=now, path=path)

    def list_backups(self) -> list[BackupRecord]:
        """Backups in the directory, newest first. Files not named like a backup are ignored."""
        if not self._dir.is_dir():
            return []
        records = []
        for path in self._dir.iterdir():
            timestamp = parse_backup_filename(path.name)
            if timestamp is None or not path.is_file():
                continue
            records.append(BackupRecord(filename=path.name, timestamp=timestamp, path=path))
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records

    def prune(self) -> list[Path]:
        """Delete backups beyond the newest `keep`. Failures are logged, never raised."""
        deleted: list[Path] = []
        try:
            records = self.list_backups()
        except OSError as e:
            logger.warning("Failed to list backups in %s: %s", self._dir, e)
            return deleted

        for record in records[self._keep :]:
            try:
                record.path.unlink()
                deleted.append(record.path)
                logger.debug("Deleted old backup: %s", record.path)
            except OSError as e:
                logger.warning("Failed to delete old backup %s: %s", record.path, e)
        return deleted

    def load(self, filename: str) -> LiveConfig:
        path = self._dir / filename
        if parse_backup_filename(filename) is None or not path.is_file():
            raise BackupNotFoundError(filename)
        return parse_live_config(read_json_document(path))

    def restore(self, filename: str) -> LiveConfig:
        """Write a snapshot's servers back as the user scope; other host keys are kept."""
        config = self.load(filename)
        self._reconciler.write_enabled(self._reconciler.enabled_servers(config), "user")
        return config
