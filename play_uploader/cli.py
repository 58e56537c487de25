import argparse
import os
from pathlib import Path

from play_uploader import __version__
from play_uploader.config import UploadConfig
from play_uploader.console import UploaderConsole
from play_uploader.edits import EDIT_POLICIES
from play_uploader.pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='play-uploader',
        description='Upload an app bundle to Google Play and release it on the internal track.',
    )
    p.add_argument(
        '-j',
        '--json',
        type=Path,
        default=os.getenv('GOOGLE_APPLICATION_CREDENTIALS') or None,
        help='Service account json file path (default: $GOOGLE_APPLICATION_CREDENTIALS).',
    )
    p.add_argument('-f', '--file', type=Path, help='App bundle (.aab) file path.')
    p.add_argument('-p', '--package-name', help='Package name, e.g. com.example.app')
    p.add_argument(
        '--edit-policy',
        choices=sorted(EDIT_POLICIES),
        default='fixed',
        help='Reuse the fixed "app-edit" id or let the server create a new edit (default: %(default)s)',
    )
    p.add_argument(
        '--commit-on-track-failure',
        action='store_true',
        help='Still commit the edit when the track could not be updated (the run is reported as failed)',
    )
    p.add_argument('--no-progress', dest='progress', action='store_false', help='Hide the upload progress bar')
    p.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return p


def config_from_args(args: argparse.Namespace) -> UploadConfig:
    return UploadConfig(
        json_path=Path(args.json) if args.json else None,
        bundle_path=args.file,
        package_name=args.package_name,
        edit_policy=EDIT_POLICIES[args.edit_policy](),
        commit_on_track_failure=args.commit_on_track_failure,
        progress=args.progress,
    )


def main(argv: list[str] | None = None, console: UploaderConsole | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or UploaderConsole()
    outcome = run_pipeline(config_from_args(args), console)
    return outcome.exit_code


if __name__ == '__main__':
    raise SystemExit(main())
