from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import google.auth.exceptions
import httplib2
from googleapiclient.errors import HttpError

ErrorKind = Literal[
    'missing_argument',
    'file_not_found',
    'invalid_credential_format',
    'authentication_failed',
    'edit_not_found',
    'edit_unavailable',
    'upload_failed',
    'track_not_found',
    'track_update_failed',
    'commit_failed',
]

# what a call to the API can raise: HTTP status errors, a failed token refresh
# inside AuthorizedHttp, httplib2 and socket failures
API_ERRORS = (HttpError, google.auth.exceptions.GoogleAuthError, httplib2.HttpLib2Error, OSError)


@dataclass(frozen=True, slots=True)
class PublishError:
    kind: ErrorKind
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        return f'{self.message} ({self.hint})' if self.hint else self.message


def describe_http_error(e: Exception) -> str:
    """Reduce an API failure to a single line, e.g. `HTTP 404: Package not found: com.example.app`."""
    if isinstance(e, HttpError):
        return f'HTTP {e.status_code}: {e.reason or "no details"}'
    return f'{type(e).__name__}: {e}'


def is_not_found(e: Exception) -> bool:
    return isinstance(e, HttpError) and e.status_code == 404
