from dataclasses import dataclass
from typing import Any

import google.auth.exceptions
from google.oauth2 import service_account
from google_auth_httplib2 import AuthorizedHttp, Request
from googleapiclient.discovery import build
from googleapiclient.http import build_http

from play_uploader.console import UploaderConsole
from play_uploader.credentials import Credential
from play_uploader.errors import PublishError
from play_uploader.result import Err, Ok, Result

ANDROIDPUBLISHER_SCOPE = 'https://www.googleapis.com/auth/androidpublisher'
SCOPES = (ANDROIDPUBLISHER_SCOPE,)


@dataclass
class AuthSession:
    """
    Scoped service account credentials plus the androidpublisher client built on
    them. `AuthorizedHttp` refreshes the token before any request once it expires.
    """

    credentials: service_account.Credentials
    service: Any


def authenticate(
    credential: Credential,
    console: UploaderConsole,
    scopes: tuple[str, ...] = SCOPES,
) -> Result[AuthSession, PublishError]:
    console.info(f'Signing in... ({credential.client_email})')
    try:
        creds = service_account.Credentials.from_service_account_info(credential.info, scopes=list(scopes))
        # fetch the first token now so a bad key or revoked account fails here
        creds.refresh(Request(build_http()))
        http = AuthorizedHttp(creds, http=build_http())
        service = build('androidpublisher', 'v3', http=http, cache_discovery=False)
    except (ValueError, google.auth.exceptions.GoogleAuthError, OSError) as e:
        return Err(PublishError('authentication_failed', 'Sign-in failed.', f'{type(e).__name__}: {e}'))

    console.info('Sign-in success.')
    return Ok(AuthSession(credentials=creds, service=service))
