from __future__ import annotations
import math
import random
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import WORD_LENGTH
from .errors import LengthMismatch


class FeedbackSymbol(Enum):
    EXACT = "+"
    PRESENT = "^"
    ABSENT = "-"


@dataclass(frozen=True)
class Verdict:
    """Secuencia de simbolos por posicion; se imprime como "+^-^-"."""
    symbols: Tuple[FeedbackSymbol, ...]

    @classmethod
    def parse(cls, text: str) -> "Verdict":
        try:
            return cls(tuple(FeedbackSymbol(ch) for ch in text.strip()))
        except ValueError:
            raise ValueError(f"veredicto invalido: {text!r} (usa + ^ -)") from None

    @property
    def is_win(self) -> bool:
        return bool(self.symbols) and all(s is FeedbackSymbol.EXACT for s in self.symbols)

    def count(self, symbol: FeedbackSymbol) -> int:
        return sum(1 for s in self.symbols if s is symbol)

    def __iter__(self) -> Iterator[FeedbackSymbol]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, i: int) -> FeedbackSymbol:
        return self.symbols[i]

    def __str__(self) -> str:
        return "".join(s.value for s in self.symbols)


def analyze(target: str, guess: str, word_length: int = WORD_LENGTH) -> Verdict:
    """
    Retorna el veredicto de `guess` contra `target`.
    Primero los aciertos exactos; luego cada letra sobrante del guess,
    de izquierda a derecha, consume la primera letra libre igual del target.
    Asi una letra repetida en el guess solo se marca tantas veces como
    aparece (sin consumir) en el target.
    """
    if len(target) != word_length or len(guess) != word_length:
        raise LengthMismatch(
            f"las palabras deben tener {word_length} letras: "
            f"target={len(target)}, guess={len(guess)}"
        )

    res = [FeedbackSymbol.ABSENT] * word_length
    target_used = [False] * word_length
    guess_used = [False] * word_length

    # exactos
    for i in range(word_length):
        if guess[i] == target[i]:
            res[i] = FeedbackSymbol.EXACT
            target_used[i] = guess_used[i] = True

    # presentes en otra posicion
    for i in range(word_length):
        if guess_used[i]:
            continue
        for j in range(word_length):
            if not target_used[j] and target[j] == guess[i]:
                res[i] = FeedbackSymbol.PRESENT
                target_used[j] = guess_used[i] = True
                break

    return Verdict(tuple(res))


# -------------------- Sugerencias por entropia --------------------

def pattern_distribution(guess: str, candidates: Sequence[str]) -> Dict[str, int]:
    dist: Dict[str, int] = defaultdict(int)
    for cand in candidates:
        dist[str(analyze(cand, guess, len(guess)))] += 1
    return dict(dist)


def entropy_bits(dist: Dict[str, int]) -> float:
    total = sum(dist.values())
    if total == 0:
        return 0.0
    H = 0.0
    for c in dist.values():
        p = c / total
        H += -p * math.log2(p)
    return H


def rank_guesses(
    guess_pool: Sequence[str],
    candidates: Sequence[str],
    top_k: int = 5,
    sample_answers: Optional[int] = None,
    limit_guess_pool: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[Tuple[str, float, float]]:
    """
    Evalua cada palabra del pool contra los candidatos.
    Retorna [(palabra, bits, candidatos_esperados)] ordenado por bits desc.
    Con `sample_answers` se evalua sobre una muestra de candidatos.
    """
    if not guess_pool or not candidates:
        return []

    answers = list(candidates)
    if sample_answers and len(answers) > sample_answers:
        answers = (rng or random.Random(0)).sample(answers, sample_answers)

    pool = guess_pool[:limit_guess_pool] if limit_guess_pool else guess_pool

    n = len(answers)
    scores: List[Tuple[str, float, float]] = []
    for guess in pool:
        dist = pattern_distribution(guess, answers)
        exp_rem = sum((c / n) * c for c in dist.values())
        scores.append((guess, entropy_bits(dist), exp_rem))

    # bits desc, expected_remaining asc; el orden del pool desempata
    scores.sort(key=lambda t: (-t[1], t[2]))
    return scores[:top_k]


def suggest_move(
    candidates: Sequence[str],
    guess_pool: Optional[Sequence[str]] = None,
    top_k: int = 5,
    sample_answers: Optional[int] = None,
    limit_guess_pool: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> dict:
    """
    Recorre el pool (por defecto los candidatos) y retorna la palabra
    de mayor entropia esperada sobre los candidatos actuales.
    """
    if not candidates:
        return {
            "guess": None,
            "expected_information_bits": 0.0,
            "estimated_pruning": 0.0,
            "why": "Sin candidatos.",
            "alternatives": [],
        }

    top_k = max(1, top_k)
    ranked = rank_guesses(
        guess_pool or candidates, candidates, top_k=top_k,
        sample_answers=sample_answers, limit_guess_pool=limit_guess_pool, rng=rng,
    )
    best_guess, best_H, _ = ranked[0]
    dist = pattern_distribution(best_guess, candidates)

    total = sum(dist.values()) or 1
    largest = max(dist.values()) or 1
    pruning = 1.0 - (largest / total)

    return {
        "guess": best_guess,
        "expected_information_bits": round(best_H, 3),
        "estimated_pruning": round(pruning, 3),
        "why": "Maximiza entropia sobre candidatos actuales.",
        "alternatives": [
            {"word": w, "entropy_bits": round(b, 4), "expected_remaining": round(er, 2)}
            for (w, b, er) in ranked
        ],
    }
