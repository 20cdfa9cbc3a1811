# tools/build_russian_words.py
# Regenera src/wordle_ru/words.txt con las palabras rusas mas frecuentes
# de la longitud configurada (wordfreq).
import argparse
import os

from wordfreq import top_n_list

from wordle_ru.config import GameConfig
from wordle_ru.dictionary import validate_word
from wordle_ru.normalize import normalize

OUTPUT = os.path.join(os.path.dirname(__file__), "..", "src", "wordle_ru", "words.txt")


def build(n: int, config: GameConfig):
    seen = set()
    out = []
    for raw in top_n_list("ru", n):
        w = normalize(raw, config)
        if validate_word(w, config) is None and w not in seen:
            seen.add(w)
            out.append(w)
    return out


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-n", type=int, default=50000, help="Palabras de wordfreq a revisar")
    parser.add_argument("-o", "--output", default=OUTPUT)
    args = parser.parse_args()

    config = GameConfig.from_env()
    words = build(args.n, config)

    os.makedirs(os.path.dirname(args.output), exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as fout:
        for w in words:
            fout.write(w + "\n")

    print(f"Palabras revisadas: {args.n}")
    print(f"Palabras escritas ({config.word_length} letras): {len(words)}")
    print(f"Guardado en: {args.output}")


if __name__ == "__main__":
    main()
