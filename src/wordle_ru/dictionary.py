from __future__ import annotations
import random
from collections import Counter
from importlib.resources import files
from typing import Iterable, Iterator, List, Optional, Tuple

from .config import DEFAULT_CONFIG, GameConfig
from .errors import InvalidWord, LoadError
from .normalize import normalize
from .observer import GameObserver

MOST_COMMON_LETTERS_COUNT = 10


def validate_word(word: str, config: GameConfig = DEFAULT_CONFIG) -> Optional[InvalidWord]:
    """Retorna el error de validacion de una palabra ya normalizada, o None."""
    if not word or word.isspace():
        return InvalidWord("Слово не может быть пустым")
    if len(word) != config.word_length:
        return InvalidWord(
            f"Слово должно быть {config.word_length} букв. Введено: {len(word)}"
        )
    if not set(word) <= config.letters:
        return InvalidWord(f"Слово должно содержать только буквы алфавита: {word}")
    return None


class Dictionary:
    """
    Conjunto ordenado e inmutable de palabras validas.
    Se puede compartir entre partidas: nada lo modifica despues de crearlo.
    """

    def __init__(self, words: Iterable[str], config: GameConfig = DEFAULT_CONFIG,
                 observer: Optional[GameObserver] = None):
        self.config = config
        observer = observer or GameObserver()
        seen = {}
        for raw in words:
            w = normalize(raw, config)
            error = validate_word(w, config)
            if error is not None:
                if w:
                    observer.word_skipped(raw, str(error))
                continue
            seen.setdefault(w, None)
        self._words: Tuple[str, ...] = tuple(seen)
        self._word_set = frozenset(self._words)
        self._frequency: Optional[Counter] = None

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and normalize(word, self.config) in self._word_set

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"Dictionary({len(self._words)} words)"

    def random_word(self, rng: Optional[random.Random] = None) -> str:
        if not self._words:
            raise LoadError("Словарь пуст.")
        return (rng or random.Random()).choice(self._words)

    def letter_frequency(self) -> Counter:
        if self._frequency is None:
            self._frequency = Counter(ch for w in self._words for ch in w)
        return Counter(self._frequency)

    def most_common_letters(self, n: int = MOST_COMMON_LETTERS_COUNT) -> List[str]:
        return [ch for ch, _ in self.letter_frequency().most_common(n)]


def load_dictionary(lines: Iterable[str], config: GameConfig = DEFAULT_CONFIG,
                    observer: Optional[GameObserver] = None) -> Dictionary:
    """
    Construye el diccionario desde lineas crudas (una palabra por linea).
    Las lineas invalidas se omiten; si no queda ninguna palabra -> LoadError.
    """
    observer = observer or GameObserver()
    lines = list(lines)
    dictionary = Dictionary(lines, config, observer)
    if not len(dictionary):
        raise LoadError(
            f"Файл не содержит ни одного корректного {config.word_length}-буквенного слова."
        )
    observer.dictionary_loaded(len(lines), len(dictionary))
    return dictionary


def load_dictionary_file(path: str, config: GameConfig = DEFAULT_CONFIG,
                         observer: Optional[GameObserver] = None) -> Dictionary:
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except FileNotFoundError:
        raise LoadError(f"Файл не найден: {path}") from None
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Не удалось прочитать словарь {path}: {e}") from e
    return load_dictionary(lines, config, observer)


def load_bundled_dictionary(config: GameConfig = DEFAULT_CONFIG,
                            observer: Optional[GameObserver] = None) -> Dictionary:
    """Usa `config.words_file` si esta definido; si no, el words.txt del paquete."""
    if config.words_file:
        return load_dictionary_file(config.words_file, config, observer)
    txt = files("wordle_ru").joinpath("words.txt").read_text(encoding="utf-8")
    return load_dictionary(txt.splitlines(), config, observer)
