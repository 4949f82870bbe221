"""
Checkpoint Manager: Emotional Field Snapshots.

Saves the persistable part of an EmotionalField (intensities and the active
synergy id) so a run can resume where it left off. The behavior window and
synergy cooldown are session-scoped and never written.

Storage: gzip-compressed JSON in the configured checkpoint directory.
Atomic writes via tempfile + rename to prevent corruption.
"""

from __future__ import annotations

import gzip
import json
import tempfile
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog
from pydantic import BaseModel, Field

from affectfield.affect.catalog import EMOTION_NAMES

logger = structlog.get_logger(__name__)


class FieldCheckpoint(BaseModel):
    """Persistable emotional field state."""

    checkpoint_id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: float = Field(default_factory=time.time)

    intensities: dict[str, float] = Field(
        default_factory=lambda: {name: 0.0 for name in EMOTION_NAMES}
    )
    active_synergy_id: Optional[str] = None

    # Metadata
    affectfield_version: str = ""
    format_version: int = 1

    @classmethod
    def from_field_dict(cls, data: dict[str, Any], **kwargs: Any) -> FieldCheckpoint:
        """Build from ``EmotionalField.to_dict()`` output."""
        return cls(
            intensities=dict(data.get("intensities") or {}),
            active_synergy_id=data.get("activeSynergyId"),
            **kwargs,
        )

    def to_field_dict(self) -> dict[str, Any]:
        """The shape ``EmotionalField.restore_from_dict()`` accepts."""
        return {
            "intensities": dict(self.intensities),
            "activeSynergyId": self.active_synergy_id,
        }


class CheckpointManager:
    """Manages checkpoint storage, listing, pruning and loading."""

    def __init__(self, checkpoint_dir: Path, max_checkpoints: int = 10) -> None:
        self._checkpoint_dir = Path(checkpoint_dir)
        self._max_checkpoints = max(1, max_checkpoints)

    @property
    def checkpoint_dir(self) -> Path:
        return self._checkpoint_dir

    def save(self, checkpoint: FieldCheckpoint) -> Path:
        """Write checkpoint to disk as compressed JSON.

        Uses atomic write (tempfile + rename) to prevent corruption.
        Prunes old checkpoints beyond max_checkpoints (keep newest).
        """
        self._checkpoint_dir.mkdir(parents=True, exist_ok=True)

        # Filename: YYYYMMDD-HHMMSS-{4hex}.json.gz
        dt = datetime.fromtimestamp(checkpoint.timestamp, tz=timezone.utc)
        filename = f"{dt.strftime('%Y%m%d-%H%M%S')}-{checkpoint.checkpoint_id[:4]}.json.gz"
        target = self._checkpoint_dir / filename

        data = checkpoint.model_dump_json(indent=None).encode("utf-8")
        compressed = gzip.compress(data, compresslevel=6)

        fd, tmp_path = tempfile.mkstemp(dir=str(self._checkpoint_dir), suffix=".tmp")
        try:
            with open(fd, "wb") as f:
                f.write(compressed)
            Path(tmp_path).replace(target)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.info(
            "checkpoint.saved",
            checkpoint_id=checkpoint.checkpoint_id,
            size_bytes=len(compressed),
            path=str(target),
        )

        self._prune_old_checkpoints()
        return target

    def load(self, path: Path) -> Optional[FieldCheckpoint]:
        """Load and parse a single checkpoint file, or None if unreadable."""
        try:
            with gzip.open(path, "rb") as f:
                raw = f.read()
            return FieldCheckpoint.model_validate_json(raw)
        except Exception:
            logger.warning("checkpoint.load_failed", path=str(path), exc_info=True)
            return None

    def load_latest(self) -> Optional[FieldCheckpoint]:
        """Load the most recent checkpoint, or None if none exist."""
        for path in self._list_checkpoint_files():
            checkpoint = self.load(path)
            if checkpoint is not None:
                return checkpoint
        return None

    def list_checkpoints(self) -> list[dict[str, Any]]:
        """List available checkpoints with metadata, newest first."""
        result = []
        for path in self._list_checkpoint_files():
            try:
                with gzip.open(path, "rb") as f:
                    raw = json.loads(f.read())
                result.append({
                    "checkpoint_id": raw.get("checkpoint_id", ""),
                    "timestamp": raw.get("timestamp", 0),
                    "active_synergy_id": raw.get("active_synergy_id"),
                    "size_bytes": path.stat().st_size,
                    "path": str(path),
                })
            except (OSError, ValueError):
                logger.debug("checkpoint.list_parse_failed", path=str(path))
        return result

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _list_checkpoint_files(self) -> list[Path]:
        """Return checkpoint files sorted newest first."""
        if not self._checkpoint_dir.exists():
            return []
        return sorted(
            self._checkpoint_dir.glob("*.json.gz"),
            key=lambda p: (p.stat().st_mtime, p.name),
            reverse=True,
        )

    def _prune_old_checkpoints(self) -> None:
        """Delete oldest checkpoints beyond max_checkpoints."""
        files = self._list_checkpoint_files()
        if len(files) <= self._max_checkpoints:
            return
        for old_file in files[self._max_checkpoints:]:
            try:
                old_file.unlink()
                logger.debug("checkpoint.pruned", path=str(old_file))
            except OSError:
                logger.debug("checkpoint.prune_failed", path=str(old_file))
