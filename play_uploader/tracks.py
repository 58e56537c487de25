"""
Release tracks. A new release is appended to the end of the target track's
release list and the whole track is pushed back.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from play_uploader.console import UploaderConsole
from play_uploader.errors import API_ERRORS, PublishError, describe_http_error
from play_uploader.result import Err, Ok, Result


@dataclass(frozen=True)
class LocalizedText:
    language: str
    text: str


DEFAULT_RELEASE_NOTES = (
    LocalizedText('tr-TR', 'Hata düzeltmeleri ve performans iyileştirmeleri.'),
    LocalizedText('en-US', 'Bug fixes and performance improvements.'),
)


@dataclass(frozen=True)
class Release:
    name: str
    version_codes: list[int]
    status: str = 'inProgress'
    user_fraction: float = 0.9999
    in_app_update_priority: int = 5
    release_notes: tuple[LocalizedText, ...] = field(default=DEFAULT_RELEASE_NOTES)

    def __post_init__(self):
        if not self.version_codes:
            raise ValueError('a release needs at least one version code')
        if not 0.0 < self.user_fraction <= 1.0:
            raise ValueError(f'user_fraction must be in (0, 1], got {self.user_fraction}')
        if not 0 <= self.in_app_update_priority <= 5:
            raise ValueError(f'in_app_update_priority must be 0-5, got {self.in_app_update_priority}')

    def to_body(self) -> dict:
        return {
            'name': self.name,
            'status': self.status,
            'userFraction': self.user_fraction,
            # int64 fields travel as strings
            'versionCodes': [str(vc) for vc in self.version_codes],
            'inAppUpdatePriority': self.in_app_update_priority,
            'releaseNotes': [{'language': n.language, 'text': n.text} for n in self.release_notes],
        }


def find_track(tracks: list[dict], name: str) -> dict | None:
    return next((t for t in tracks if t.get('track') == name), None)


def compose_release(
    track: dict,
    version_code: int,
    *,
    user_fraction: float = 0.9999,
    priority: int = 5,
    release_notes: tuple[LocalizedText, ...] = DEFAULT_RELEASE_NOTES,
) -> dict:
    """
    Return a copy of `track` with one more release. The release is named after
    its position, so a track holding N releases gets release `str(N)`.
    """
    releases = list(track.get('releases') or [])
    release = Release(
        name=str(len(releases)),
        version_codes=[version_code],
        user_fraction=user_fraction,
        in_app_update_priority=priority,
        release_notes=release_notes,
    )
    return {**track, 'releases': [*releases, release.to_body()]}


def list_tracks(service, package_name: str, edit_id: str) -> Result[list[dict], PublishError]:
    try:
        res = service.edits().tracks().list(packageName=package_name, editId=edit_id).execute()
    except API_ERRORS as e:
        return Err(PublishError('track_update_failed', 'Tracks could not be listed.', describe_http_error(e)))
    return Ok(list((res or {}).get('tracks') or []))


def publish_release(
    service,
    edit,
    artifact,
    console: UploaderConsole,
    *,
    track_name: str = 'internal',
    user_fraction: float = 0.9999,
    priority: int = 5,
    release_notes: tuple[LocalizedText, ...] = DEFAULT_RELEASE_NOTES,
) -> Result[dict, PublishError]:
    console.info('Getting tracks...')
    listed = list_tracks(service, edit.package_name, edit.id)
    if isinstance(listed, Err):
        return listed

    track = find_track(listed.value, track_name)
    if track is None:
        return Err(PublishError('track_not_found', f"Track '{track_name}' not found."))

    body = compose_release(
        track,
        artifact.version_code,
        user_fraction=user_fraction,
        priority=priority,
        release_notes=release_notes,
    )
    console.info(f'Updating {track_name}...')
    try:
        updated = (
            service.edits()
            .tracks()
            .update(packageName=edit.package_name, editId=edit.id, track=track_name, body=body)
            .execute()
        )
    except API_ERRORS as e:
        return Err(PublishError('track_update_failed', 'Track could not be updated.', describe_http_error(e)))

    updated = updated or body
    console.info('Track update completed.')
    console.info(f'New release added to {updated.get("track", track_name)}.')
    console.info(f'Total releases: {len(updated.get("releases") or [])}.')
    return Ok(updated)
