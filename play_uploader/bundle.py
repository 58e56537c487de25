import sys
from dataclasses import dataclass
from pathlib import Path

from googleapiclient.http import MediaIoBaseUpload
from tqdm import tqdm

from play_uploader.console import UploaderConsole
from play_uploader.edits import Edit
from play_uploader.errors import API_ERRORS, PublishError, describe_http_error
from play_uploader.result import Err, Ok, Result

BUNDLE_MIMETYPE = 'application/octet-stream'
SIZE_SUFFIXES = ('B', 'KB', 'MB', 'GB', 'TB')


@dataclass(frozen=True)
class Bundle:
    path: Path
    size: int


@dataclass(frozen=True)
class UploadedArtifact:
    version_code: int
    sha256: str | None = None


def format_size(num_bytes: int, decimals: int = 0) -> str:
    """`format_size(1536, 2)` -> `'1.50KB'`"""
    if num_bytes <= 0:
        return f'0{SIZE_SUFFIXES[0]}'
    i = 0
    while num_bytes >= 1024 ** (i + 1) and i < len(SIZE_SUFFIXES) - 1:
        i += 1
    return f'{num_bytes / 1024**i:.{decimals}f}{SIZE_SUFFIXES[i]}'


def open_bundle(path: str | Path, console: UploaderConsole) -> Result[Bundle, PublishError]:
    path = Path(path)
    try:
        if not path.is_file():
            return Err(PublishError('file_not_found', f"File does not exist. '{path}'"))
        size = path.stat().st_size
    except OSError:
        return Err(PublishError('file_not_found', f"File does not exist. '{path}'"))

    try:
        with path.open('rb'):
            pass
    except OSError as e:
        return Err(PublishError('file_not_found', f"File could not be read. '{path}'", f'{type(e).__name__}: {e}'))

    console.info(f'File read {path.name} ({format_size(size, decimals=2)})')
    return Ok(Bundle(path=path, size=size))


def _upload_resumable(request, bar: tqdm) -> dict:
    # one next_chunk() per chunk; no retries
    response = None
    while response is None:
        status, response = request.next_chunk()
        if status:
            bar.update(status.resumable_progress - bar.n)
    bar.update(bar.total - bar.n)
    return response


def upload_bundle(
    service,
    edit: Edit,
    bundle: Bundle,
    console: UploaderConsole,
    *,
    chunk_size: int,
    progress: bool = True,
) -> Result[UploadedArtifact, PublishError]:
    """
    Stream the bundle into the edit as a resumable upload. The file is read one
    chunk at a time and is closed again however the upload ends.
    """
    console.info('Uploading app bundle...')
    try:
        with bundle.path.open('rb') as fh, tqdm(
            total=bundle.size,
            desc=bundle.path.name,
            unit='B',
            unit_scale=True,
            unit_divisor=1024,
            disable=None if progress else True,
            file=sys.stderr,
        ) as bar:
            media = MediaIoBaseUpload(fh, mimetype=BUNDLE_MIMETYPE, chunksize=chunk_size, resumable=True)
            request = (
                service.edits()
                .bundles()
                .upload(
                    packageName=edit.package_name,
                    editId=edit.id,
                    media_body=media,
                )
            )
            res = _upload_resumable(request, bar)
    except API_ERRORS as e:
        return Err(PublishError('upload_failed', 'App bundle could not be uploaded.', describe_http_error(e)))

    if not res or res.get('versionCode') is None:
        return Err(PublishError('upload_failed', 'App bundle could not be uploaded.', 'response has no versionCode'))

    artifact = UploadedArtifact(version_code=int(res['versionCode']), sha256=res.get('sha256'))
    console.info(f'App bundle uploaded. Version Code: {artifact.version_code}')
    return Ok(artifact)
