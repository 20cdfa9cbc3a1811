from __future__ import annotations
from typing import Optional

from unidecode import unidecode

from .config import DEFAULT_CONFIG, GameConfig


def _fold_char(ch: str, config: GameConfig) -> str:
    if ch in config.letters:
        return ch
    if ch in config.variants:
        return config.variants[ch]
    # variantes con diacriticos de un alfabeto latino (é -> e)
    base = unidecode(ch).lower()
    if len(base) == 1 and base in config.letters:
        return base
    return ch


def normalize(raw: Optional[str], config: GameConfig = DEFAULT_CONFIG) -> str:
    """
    Normaliza una entrada cruda: recorta espacios, pasa a minusculas y
    une variantes del alfabeto (ё -> е). No valida; nunca falla.
    """
    if raw is None:
        return ""
    return "".join(_fold_char(ch, config) for ch in raw.strip().lower())
