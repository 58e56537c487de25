"""
Tagged console output. Every line is `[Google App Uploader]: <message>`, the tag
colored by severity, all of it on stdout.
"""

from rich.console import Console
from rich.text import Text

TAG = '[Google App Uploader]:'
STYLES = {'info': 'green', 'warn': 'yellow', 'error': 'red'}


class UploaderConsole:
    def __init__(self, console: Console | None = None):
        self._console = console or Console(highlight=False, soft_wrap=True)

    def _print(self, level: str, message: object) -> None:
        self._console.print(Text.assemble((TAG, STYLES[level]), ' ', str(message)))

    def info(self, message: object) -> None:
        self._print('info', message)

    def warn(self, message: object) -> None:
        self._print('warn', message)

    def error(self, message: object) -> None:
        self._print('error', message)
