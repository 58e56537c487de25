"""
Edits are server-side transactions grouping the upload and the track change
of one package until they are committed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from play_uploader.console import UploaderConsole
from play_uploader.errors import API_ERRORS, PublishError, describe_http_error, is_not_found
from play_uploader.result import Err, Ok, Result

DEFAULT_EDIT_ID = 'app-edit'


@dataclass(frozen=True)
class Edit:
    id: str
    package_name: str
    expiry_time_seconds: str | None = None


def _edit_from_response(res: dict, package_name: str) -> Result[Edit, PublishError]:
    edit_id = (res or {}).get('id')
    if not edit_id:
        return Err(PublishError('edit_unavailable', 'App edit id is null.'))
    return Ok(Edit(id=edit_id, package_name=package_name, expiry_time_seconds=res.get('expiryTimeSeconds')))


def insert_edit(service, package_name: str, body: dict) -> Result[Edit, PublishError]:
    try:
        res = service.edits().insert(packageName=package_name, body=body).execute()
    except API_ERRORS as e:
        return Err(PublishError('edit_unavailable', 'App edit could not be created.', describe_http_error(e)))
    return _edit_from_response(res, package_name)


def lookup_edit(service, package_name: str, edit_id: str) -> Result[Edit, PublishError]:
    """Fetch an edit by id. A 404 comes back as `edit_not_found`, anything else as `edit_unavailable`."""
    try:
        res = service.edits().get(packageName=package_name, editId=edit_id).execute()
    except API_ERRORS as e:
        if is_not_found(e):
            return Err(PublishError('edit_not_found', f"App edit '{edit_id}' not found."))
        return Err(PublishError('edit_unavailable', 'App edit could not be fetched.', describe_http_error(e)))
    return _edit_from_response(res, package_name)


class EditPolicy(Protocol):
    def open(self, service, package_name: str, console: UploaderConsole) -> Result[Edit, PublishError]: ...


@dataclass(frozen=True)
class FixedEditPolicy:
    """Reuse one well-known edit id across runs, creating it when the server has none."""

    edit_id: str = DEFAULT_EDIT_ID

    def open(self, service, package_name: str, console: UploaderConsole) -> Result[Edit, PublishError]:
        console.info('Searching app edit...')
        found = lookup_edit(service, package_name, self.edit_id)
        if isinstance(found, Ok):
            console.info('App edit found.')
            return found
        if found.error.kind != 'edit_not_found':
            return found

        console.info('App edit not found, creating a new one.')
        created = insert_edit(service, package_name, {'id': self.edit_id})
        if isinstance(created, Ok):
            console.info('App edit created.')
        return created


@dataclass(frozen=True)
class GeneratedEditPolicy:
    """Start a fresh edit every run and let the server pick its id."""

    def open(self, service, package_name: str, console: UploaderConsole) -> Result[Edit, PublishError]:
        console.info('Creating app edit...')
        created = insert_edit(service, package_name, {})
        if isinstance(created, Ok):
            console.info(f'App edit created. ({created.value.id})')
        return created


EDIT_POLICIES = {'fixed': FixedEditPolicy, 'generated': GeneratedEditPolicy}


def open_edit(service, package_name: str, policy: EditPolicy, console: UploaderConsole) -> Result[Edit, PublishError]:
    return policy.open(service, package_name, console)


def commit_edit(service, edit: Edit, console: UploaderConsole) -> Result[Edit, PublishError]:
    try:
        res = service.edits().commit(packageName=edit.package_name, editId=edit.id).execute()
    except API_ERRORS as e:
        return Err(PublishError('commit_failed', 'App edit could not be committed.', describe_http_error(e)))
    console.info('App edit committed.')
    return Ok(Edit(id=(res or {}).get('id') or edit.id, package_name=edit.package_name))
