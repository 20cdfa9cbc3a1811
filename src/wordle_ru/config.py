from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

WORD_LENGTH = 5
MAX_ATTEMPTS = 6
RUSSIAN_ALPHABET = "абвгдежзийклмнопрстуфхцчшщъыьэюя"
PLACEHOLDER = "_"


def _default_variants() -> Dict[str, str]:
    return {"ё": "е"}


@dataclass(frozen=True)
class GameConfig:
    """Parametros fijos de una partida: longitud, intentos y alfabeto."""
    word_length: int = WORD_LENGTH
    max_attempts: int = MAX_ATTEMPTS
    alphabet: str = RUSSIAN_ALPHABET
    variants: Dict[str, str] = field(default_factory=_default_variants)
    placeholder: str = PLACEHOLDER
    words_file: Optional[str] = None

    def __post_init__(self):
        if self.word_length <= 0:
            raise ValueError("word_length debe ser positivo")
        if self.max_attempts <= 0:
            raise ValueError("max_attempts debe ser positivo")
        if not self.alphabet:
            raise ValueError("el alfabeto no puede estar vacio")

    @property
    def letters(self) -> FrozenSet[str]:
        return frozenset(self.alphabet)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "GameConfig":
        """
        Lee WORDLE_WORD_LENGTH, WORDLE_MAX_ATTEMPTS, WORDLE_ALPHABET y
        WORDLE_WORDS_FILE; lo que no este definido queda con su valor por defecto.
        """
        env = os.environ if environ is None else environ
        return cls(
            word_length=int(env.get("WORDLE_WORD_LENGTH", WORD_LENGTH)),
            max_attempts=int(env.get("WORDLE_MAX_ATTEMPTS", MAX_ATTEMPTS)),
            alphabet=env.get("WORDLE_ALPHABET", RUSSIAN_ALPHABET).strip().lower(),
            words_file=env.get("WORDLE_WORDS_FILE") or None,
        )


DEFAULT_CONFIG = GameConfig()
