from __future__ import annotations
from typing import Iterable, List, Optional

from .config import PLACEHOLDER, WORD_LENGTH
from .constraints import ConstraintSet
from .errors import InvalidWord


def filter_candidates(words: Iterable[str], constraints: ConstraintSet) -> List[str]:
    """Palabras consistentes con `constraints`, en el orden de entrada."""
    return [w for w in words if constraints.allows(w)]


def find_words(
    words: Iterable[str],
    must_contain: Iterable[str] = (),
    must_not_contain: Iterable[str] = (),
    pattern: Optional[str] = None,
    placeholder: str = PLACEHOLDER,
    word_length: int = WORD_LENGTH,
) -> List[str]:
    """
    Consulta ad-hoc sin partida: letras obligatorias, letras prohibidas y
    un patron posicional donde `placeholder` es comodin ("г___й").
    """
    required = set(must_contain)
    forbidden = set(must_not_contain)
    fixed = {}
    if pattern is not None:
        if len(pattern) != word_length:
            raise InvalidWord(
                f"Шаблон должен быть длиной {word_length} символов: {pattern!r}"
            )
        fixed = {i: ch for i, ch in enumerate(pattern) if ch != placeholder}

    out: List[str] = []
    for w in words:
        if any(ch not in w for ch in required):
            continue
        if any(ch in w for ch in forbidden):
            continue
        if any(w[i] != ch for i, ch in fixed.items()):
            continue
        out.append(w)
    return out
