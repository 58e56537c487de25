"""
Ok / Err result values threaded through the publishing stages.

    match load_credential(path):
        case Ok(credential):
            ...
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f'Ok({self.value!r})'


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def unwrap(self):
        raise ValueError(f'called unwrap on Err: {self.error}')

    def __repr__(self) -> str:
        return f'Err({self.error!r})'


type Result[T, E] = Ok[T] | Err[E]
