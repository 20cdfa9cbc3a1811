from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .errors import WordleError
    from .game import Attempt, GameSession


class GameObserver:
    """
    Recibe los eventos del diccionario y de la partida.
    Todos los metodos son no-op; se sobreescribe solo lo que interesa.
    """

    def dictionary_loaded(self, total_lines: int, unique_words: int) -> None:
        pass

    def word_skipped(self, raw: str, reason: str) -> None:
        pass

    def session_started(self, session: "GameSession") -> None:
        pass

    def guess_scored(self, session: "GameSession", attempt: "Attempt") -> None:
        pass

    def guess_rejected(self, session: "GameSession", raw: str, error: "WordleError") -> None:
        pass

    def hint_given(self, session: "GameSession", hint: Optional[str]) -> None:
        pass

    def game_finished(self, session: "GameSession") -> None:
        pass


class LoggingObserver(GameObserver):
    """Escribe cada evento en el logger `wordle_ru`."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.log = logger or logging.getLogger("wordle_ru")

    def dictionary_loaded(self, total_lines, unique_words):
        self.log.info("Diccionario cargado: %d lineas, %d palabras unicas", total_lines, unique_words)

    def word_skipped(self, raw, reason):
        self.log.debug("Omitida: %r (%s)", raw, reason)

    def session_started(self, session):
        self.log.info(
            "Partida iniciada: %d intentos, diccionario de %d palabras",
            session.max_attempts, len(session.dictionary),
        )
        # la palabra oculta solo a nivel DEBUG
        self.log.debug("Palabra oculta: %s", session.target)

    def guess_scored(self, session, attempt):
        self.log.info(
            "Intento %d/%d: %s -> %s (quedan %d)",
            session.attempts_used, session.max_attempts,
            attempt.word, attempt.verdict, session.attempts_remaining,
        )

    def guess_rejected(self, session, raw, error):
        self.log.info("Intento rechazado %r: [%s] %s", raw, error.code, error)

    def hint_given(self, session, hint):
        if hint is None:
            self.log.info("Pista solicitada, sin candidatos disponibles")
        else:
            self.log.info("Pista: %s", hint)

    def game_finished(self, session):
        self.log.info(
            "Partida terminada (%s). Palabra: %s. Intentos usados: %d",
            session.state.value, session.target, session.attempts_used,
        )
