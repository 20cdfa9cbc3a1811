from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class WordleError(Exception):
    """Base de todos los errores del juego. `code` es estable para los clientes."""
    code = "wordle_error"


class LengthMismatch(WordleError):
    code = "length_mismatch"


class InvalidWord(WordleError):
    code = "invalid_word"


class NotInDictionary(WordleError):
    code = "not_in_dictionary"

    def __init__(self, word: str):
        super().__init__(f"Слово не найдено в словаре: {word}")
        self.word = word


class DuplicateGuess(WordleError):
    code = "duplicate_guess"

    def __init__(self, word: str):
        super().__init__(f"Это слово уже было использовано: {word}")
        self.word = word


class GameAlreadyOver(WordleError):
    code = "game_over"

    def __init__(self, message: str = "Игра уже окончена."):
        super().__init__(message)


class LoadError(WordleError):
    code = "load_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Resultado explicito de una operacion que puede fallar:
    o bien `value`, o bien `error`. Nunca ambos.
    """
    value: Optional[T] = None
    error: Optional[WordleError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: WordleError) -> "Outcome[T]":
        return cls(error=error)

    def unwrap(self) -> Optional[T]:
        if self.error is not None:
            raise self.error
        return self.value
