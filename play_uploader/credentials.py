import json
from dataclasses import dataclass, field
from pathlib import Path

from play_uploader.errors import PublishError
from play_uploader.result import Err, Ok, Result

DEFAULT_TOKEN_URI = 'https://oauth2.googleapis.com/token'
REQUIRED_FIELDS = ('client_email', 'private_key')


@dataclass(frozen=True)
class Credential:
    client_email: str
    private_key: str = field(repr=False)
    token_uri: str = DEFAULT_TOKEN_URI
    private_key_id: str | None = None
    project_id: str | None = None
    info: dict = field(default_factory=dict, repr=False, compare=False)


def _invalid(path: Path, reason: str) -> Err[PublishError]:
    return Err(PublishError('invalid_credential_format', f"Service account file could not be read. '{path}'", reason))


def load_credential(path: str | Path) -> Result[Credential, PublishError]:
    """
    Read a service account key file. The file must be a `.json` document holding
    at least `client_email` and `private_key`; `token_uri` falls back to Google's.
    """
    path = Path(path)
    if path.suffix.lower() != '.json':
        return _invalid(path, 'file must be a .json file')

    try:
        info = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError) as e:
        return _invalid(path, str(e))
    except json.JSONDecodeError as e:
        return _invalid(path, f'invalid JSON: {e}')

    if not isinstance(info, dict):
        return _invalid(path, 'expected a JSON object')

    missing = [k for k in REQUIRED_FIELDS if not isinstance(info.get(k), str) or not info[k].strip()]
    if missing:
        return _invalid(path, f'missing fields: {", ".join(missing)}')

    info = {**info, 'token_uri': info.get('token_uri') or DEFAULT_TOKEN_URI}
    return Ok(
        Credential(
            client_email=info['client_email'],
            private_key=info['private_key'],
            token_uri=info['token_uri'],
            private_key_id=info.get('private_key_id'),
            project_id=info.get('project_id'),
            info=info,
        )
    )
