"""
Conocimiento acumulado sobre la palabra oculta a lo largo de una partida.
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Dict, Iterable, Set, Tuple

from .config import PLACEHOLDER, WORD_LENGTH
from .engine import FeedbackSymbol, Verdict


@dataclass
class ConstraintSet:
    # Letras que aparecen en algun lugar de la palabra
    confirmed_letters: Set[str] = field(default_factory=set)
    # Letras que no aparecen; nunca contiene una letra confirmada
    excluded_letters: Set[str] = field(default_factory=set)
    # Posicion -> letra exacta
    confirmed_positions: Dict[int, str] = field(default_factory=dict)
    # Posicion -> letras que existen pero no van en esa posicion
    excluded_positions: Dict[int, Set[str]] = field(default_factory=dict)

    @classmethod
    def from_attempts(cls, attempts: Iterable[Tuple[str, Verdict]]) -> "ConstraintSet":
        cs = cls()
        for guess, verdict in attempts:
            cs.update(guess, verdict)
        return cs

    def update(self, guess: str, verdict: Verdict) -> "ConstraintSet":
        """
        Incorpora un intento. Solo agrega informacion: aplicar dos veces el
        mismo intento deja el conjunto igual que aplicarlo una vez.
        """
        if len(guess) != len(verdict):
            raise ValueError("guess y veredicto deben tener la misma longitud")

        pairs = list(enumerate(zip(guess, verdict)))

        # exactos y presentes antes que ausentes: una letra "-" en un slot
        # puede ser "+"/"^" en otro slot del mismo intento
        for i, (letter, symbol) in pairs:
            if symbol is FeedbackSymbol.EXACT:
                self._confirm(letter)
                self.confirmed_positions[i] = letter
                slot = self.excluded_positions.get(i)
                if slot:
                    slot.discard(letter)
                    if not slot:
                        del self.excluded_positions[i]
            elif symbol is FeedbackSymbol.PRESENT:
                self._confirm(letter)
                if self.confirmed_positions.get(i) != letter:
                    self.excluded_positions.setdefault(i, set()).add(letter)

        for i, (letter, symbol) in pairs:
            if symbol is FeedbackSymbol.ABSENT and letter not in self.confirmed_letters:
                self.excluded_letters.add(letter)

        return self

    def _confirm(self, letter: str) -> None:
        self.confirmed_letters.add(letter)
        self.excluded_letters.discard(letter)

    def allows(self, word: str) -> bool:
        """True si `word` es consistente con todo lo conocido."""
        if any(letter not in word for letter in self.confirmed_letters):
            return False
        if any(letter in word for letter in self.excluded_letters):
            return False
        for i, letter in self.confirmed_positions.items():
            if i >= len(word) or word[i] != letter:
                return False
        for i, letters in self.excluded_positions.items():
            if i < len(word) and word[i] in letters:
                return False
        return True

    def pattern(self, word_length: int = WORD_LENGTH, placeholder: str = PLACEHOLDER) -> str:
        return "".join(self.confirmed_positions.get(i, placeholder) for i in range(word_length))

    @property
    def is_empty(self) -> bool:
        return not (self.confirmed_letters or self.excluded_letters
                    or self.confirmed_positions or self.excluded_positions)

    def copy(self) -> "ConstraintSet":
        return copy.deepcopy(self)

    def as_dict(self) -> dict:
        return {
            "confirmed_letters": sorted(self.confirmed_letters),
            "excluded_letters": sorted(self.excluded_letters),
            "confirmed_positions": {str(i): l for i, l in sorted(self.confirmed_positions.items())},
            "excluded_positions": {
                str(i): sorted(ls) for i, ls in sorted(self.excluded_positions.items()) if ls
            },
        }
