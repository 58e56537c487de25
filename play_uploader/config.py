from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from play_uploader.edits import EditPolicy, FixedEditPolicy
from play_uploader.tracks import DEFAULT_RELEASE_NOTES, LocalizedText

UPLOAD_CHUNK_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True)
class UploadConfig:
    """Everything a publishing run needs, resolved once from the command line."""

    json_path: Path | None
    bundle_path: Path | None
    package_name: str | None
    track: str = 'internal'
    edit_policy: EditPolicy = field(default_factory=FixedEditPolicy)
    user_fraction: float = 0.9999
    priority: int = 5
    release_notes: tuple[LocalizedText, ...] = DEFAULT_RELEASE_NOTES
    # Attempt the commit even when the track could not be updated. The run still fails.
    commit_on_track_failure: bool = False
    chunk_size: int = UPLOAD_CHUNK_SIZE
    progress: bool = True
