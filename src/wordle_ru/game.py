from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .constraints import ConstraintSet
from .dictionary import Dictionary, validate_word
from .engine import Verdict, analyze
from .errors import (
    DuplicateGuess,
    GameAlreadyOver,
    InvalidWord,
    NotInDictionary,
    Outcome,
    WordleError,
)
from .filtering import filter_candidates
from .normalize import normalize
from .observer import GameObserver


class GameState(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Attempt:
    word: str
    verdict: Verdict


class GameSession:
    """
    Una partida: palabra oculta fija, presupuesto de intentos,
    historial de intentos y restricciones acumuladas.
    Al ganar o agotar los intentos queda en estado terminal.
    """

    def __init__(
        self,
        dictionary: Dictionary,
        target: str,
        config: Optional[GameConfig] = None,
        observer: Optional[GameObserver] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or dictionary.config or DEFAULT_CONFIG
        self.dictionary = dictionary
        self.observer = observer or GameObserver()
        self.rng = rng or random.Random()

        target = normalize(target, self.config)
        error = validate_word(target, self.config)
        if error is not None:
            raise InvalidWord(f"palabra oculta invalida: {error}")
        if target not in dictionary:
            raise InvalidWord(f"palabra oculta fuera del diccionario: {target}")
        self.target = target

        self._attempts: List[Attempt] = []
        self._constraints = ConstraintSet()
        self._remaining = self.config.max_attempts
        self._state = GameState.IN_PROGRESS
        self.observer.session_started(self)

    # -------------------- estado --------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state is not GameState.IN_PROGRESS

    @property
    def is_won(self) -> bool:
        return self._state is GameState.WON

    @property
    def max_attempts(self) -> int:
        return self.config.max_attempts

    @property
    def attempts_remaining(self) -> int:
        return self._remaining

    @property
    def attempts_used(self) -> int:
        return len(self._attempts)

    @property
    def attempts(self) -> Tuple[Attempt, ...]:
        return tuple(self._attempts)

    @property
    def guessed_words(self) -> List[str]:
        return [a.word for a in self._attempts]

    @property
    def verdicts(self) -> List[str]:
        return [str(a.verdict) for a in self._attempts]

    @property
    def constraints(self) -> ConstraintSet:
        return self._constraints.copy()

    @property
    def answer(self) -> Optional[str]:
        """La palabra oculta, solo cuando la partida ya termino."""
        return self.target if self.is_over else None

    def pattern(self, placeholder: Optional[str] = None) -> str:
        return self._constraints.pattern(
            self.config.word_length,
            self.config.placeholder if placeholder is None else placeholder,
        )

    # -------------------- transiciones --------------------

    def submit_guess(self, raw: str) -> Outcome[Attempt]:
        if self.is_over:
            return self._reject(raw, GameAlreadyOver())

        word = normalize(raw, self.config)
        error: Optional[WordleError] = validate_word(word, self.config)
        if error is None and word in self.guessed_words:
            error = DuplicateGuess(word)
        if error is None and word not in self.dictionary:
            error = NotInDictionary(word)
        if error is not None:
            return self._reject(raw, error)

        attempt = Attempt(word, analyze(self.target, word, self.config.word_length))
        self._attempts.append(attempt)
        self._constraints.update(word, attempt.verdict)
        self._remaining -= 1

        if attempt.verdict.is_win:
            self._state = GameState.WON
        elif self._remaining == 0:
            self._state = GameState.LOST

        self.observer.guess_scored(self, attempt)
        if self.is_over:
            self.observer.game_finished(self)
        return Outcome.success(attempt)

    def _reject(self, raw: str, error: WordleError) -> Outcome[Attempt]:
        self.observer.guess_rejected(self, raw, error)
        return Outcome.failure(error)

    def candidates(self) -> List[str]:
        """Palabras del diccionario aun posibles, sin las ya intentadas."""
        guessed = set(self.guessed_words)
        return filter_candidates(
            (w for w in self.dictionary if w not in guessed), self._constraints
        )

    def request_hint(self) -> Outcome[Optional[str]]:
        """
        Una palabra al azar consistente con lo conocido, que no sea la
        oculta ni una ya intentada. Valor None si no queda ninguna.
        No modifica la partida.
        """
        if self.is_over:
            return Outcome.failure(GameAlreadyOver())
        pool = [w for w in self.candidates() if w != self.target]
        hint = self.rng.choice(pool) if pool else None
        self.observer.hint_given(self, hint)
        return Outcome.success(hint)

    def summary(self) -> dict:
        return {
            "state": self._state.value,
            "attempts_used": self.attempts_used,
            "attempts_remaining": self._remaining,
            "max_attempts": self.max_attempts,
            "pattern": self.pattern(),
            "history": [{"guess": a.word, "verdict": str(a.verdict)} for a in self._attempts],
            "constraints": self._constraints.as_dict(),
            "answer": self.answer,
        }


def new_session(
    dictionary: Dictionary,
    rng: Optional[random.Random] = None,
    observer: Optional[GameObserver] = None,
    config: Optional[GameConfig] = None,
) -> GameSession:
    """Crea una partida con una palabra oculta elegida al azar con `rng`."""
    rng = rng or random.Random()
    target = dictionary.random_word(rng)
    return GameSession(dictionary, target, config=config, observer=observer, rng=rng)
