"""
The publishing run as a linear state machine:

    START -> CREDENTIAL_LOADED -> AUTHENTICATED -> EDIT_READY
          -> BUNDLE_UPLOADED -> TRACK_UPDATED -> COMMITTED

Each stage returns Ok/Err. The first Err moves the run to FAILED and stops it;
the exit code is decided once, from the final outcome.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum, auto

from play_uploader.auth import authenticate
from play_uploader.bundle import Bundle, UploadedArtifact, open_bundle, upload_bundle
from play_uploader.config import UploadConfig
from play_uploader.console import UploaderConsole
from play_uploader.credentials import load_credential
from play_uploader.edits import Edit, commit_edit, open_edit
from play_uploader.errors import PublishError
from play_uploader.result import Err
from play_uploader.tracks import publish_release


class Stage(Enum):
    START = auto()
    CREDENTIAL_LOADED = auto()
    AUTHENTICATED = auto()
    EDIT_READY = auto()
    BUNDLE_UPLOADED = auto()
    TRACK_UPDATED = auto()
    COMMITTED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class PublishOutcome:
    stage: Stage = Stage.START
    bundle: Bundle | None = None
    edit: Edit | None = None
    artifact: UploadedArtifact | None = None
    track: dict | None = None
    error: PublishError | None = None
    # stage reached before FAILED
    failed_after: Stage | None = None

    @property
    def exit_code(self) -> int:
        return 0 if self.stage is Stage.COMMITTED else 1

    def advance(self, stage: Stage, **changes) -> PublishOutcome:
        return replace(self, stage=stage, **changes)

    def fail(self, error: PublishError) -> PublishOutcome:
        return replace(self, stage=Stage.FAILED, error=error, failed_after=self.stage)


REQUIRED_OPTIONS = (
    ('json_path', 'Service account json file path must be provided. --json <path to json file>'),
    ('bundle_path', 'Bundle file path must be provided. --file <path to .aab file>'),
    ('package_name', 'Package name must be provided. --package-name <com.example.app>'),
)


def validate_config(config: UploadConfig) -> PublishError | None:
    for attr, message in REQUIRED_OPTIONS:
        if not getattr(config, attr):
            return PublishError('missing_argument', message)
    return None


def run_pipeline(
    config: UploadConfig,
    console: UploaderConsole,
    *,
    authenticator: Callable = authenticate,
) -> PublishOutcome:
    outcome = _run(config, console, authenticator)
    if outcome.error:
        console.error(outcome.error)
    else:
        console.info(
            f'Version code {outcome.artifact.version_code} released on {config.track} (edit {outcome.edit.id}).'
        )
    return outcome


def _run(config: UploadConfig, console: UploaderConsole, authenticator: Callable) -> PublishOutcome:
    outcome = PublishOutcome()

    if error := validate_config(config):
        return outcome.fail(error)

    # the artifact is checked before any credential or network work
    bundle = open_bundle(config.bundle_path, console)
    if isinstance(bundle, Err):
        return outcome.fail(bundle.error)
    outcome = replace(outcome, bundle=bundle.value)

    credential = load_credential(config.json_path)
    if isinstance(credential, Err):
        return outcome.fail(credential.error)
    outcome = outcome.advance(Stage.CREDENTIAL_LOADED)

    session = authenticator(credential.value, console)
    if isinstance(session, Err):
        return outcome.fail(session.error)
    service = session.value.service
    outcome = outcome.advance(Stage.AUTHENTICATED)

    edit = open_edit(service, config.package_name, config.edit_policy, console)
    if isinstance(edit, Err):
        return outcome.fail(edit.error)
    outcome = outcome.advance(Stage.EDIT_READY, edit=edit.value)

    artifact = upload_bundle(
        service,
        edit.value,
        bundle.value,
        console,
        chunk_size=config.chunk_size,
        progress=config.progress,
    )
    if isinstance(artifact, Err):
        return outcome.fail(artifact.error)
    outcome = outcome.advance(Stage.BUNDLE_UPLOADED, artifact=artifact.value)

    track = publish_release(
        service,
        edit.value,
        artifact.value,
        console,
        track_name=config.track,
        user_fraction=config.user_fraction,
        priority=config.priority,
        release_notes=config.release_notes,
    )
    if isinstance(track, Err):
        if not config.commit_on_track_failure:
            return outcome.fail(track.error)
        console.warn(f'{track.error} Committing the edit anyway.')
        committed = commit_edit(service, edit.value, console)
        if isinstance(committed, Err):
            console.error(committed.error)
        return outcome.fail(track.error)
    outcome = outcome.advance(Stage.TRACK_UPDATED, track=track.value)

    committed = commit_edit(service, edit.value, console)
    if isinstance(committed, Err):
        return outcome.fail(committed.error)
    return outcome.advance(Stage.COMMITTED, edit=committed.value)
