import random
from collections import Counter

import pytest

from wordle_ru.engine import (
    FeedbackSymbol,
    Verdict,
    analyze,
    entropy_bits,
    pattern_distribution,
    rank_guesses,
    suggest_move,
)
from wordle_ru.errors import LengthMismatch


def v(target, guess):
    return str(analyze(target, guess))


def test_same_word_is_all_exact():
    assert v("герой", "герой") == "+++++"
    assert analyze("герой", "герой").is_win


def test_partial_guess():
    assert v("герой", "гонец") == "+^-^-"
    assert v("банка", "банан") == "+++^-"
    assert v("герой", "слово") == "--^--"


def test_duplicates_consumed_by_exact_matches():
    assert v("aabbb", "aaccc") == "++---"
    # la segunda "о" no tiene pareja: la unica libre ya es exacta en 3
    assert v("герой", "горох") == "+-++-"


def test_duplicate_present_goes_to_leftmost_guess_slot():
    assert v("кошка", "ооооо") == "-+---"
    assert v("сокол", "оазис") == "^---^"
    assert v("abcde", "eeeee") == "----+"
    assert v("eabcd", "xeeex") == "-^---"


def test_length_mismatch():
    with pytest.raises(LengthMismatch):
        analyze("герой", "кот")
    with pytest.raises(LengthMismatch):
        analyze("гер", "гер")
    assert str(analyze("абв", "вба", word_length=3)) == "^+^"


def test_matches_never_exceed_letter_intersection():
    rng = random.Random(7)
    for _ in range(300):
        t = "".join(rng.choice("абвг") for _ in range(5))
        g = "".join(rng.choice("абвг") for _ in range(5))
        verdict = analyze(t, g)
        hits = len(verdict) - verdict.count(FeedbackSymbol.ABSENT)
        assert hits <= 5
        assert hits == sum((Counter(t) & Counter(g)).values())


def test_verdict_parse_and_render():
    verdict = Verdict.parse("+^-^-")
    assert str(verdict) == "+^-^-"
    assert verdict[1] is FeedbackSymbol.PRESENT
    assert verdict == analyze("герой", "гонец")
    assert not verdict.is_win
    with pytest.raises(ValueError):
        Verdict.parse("GYK")


def test_entropy_and_distribution():
    assert entropy_bits({}) == 0.0
    assert entropy_bits({"a": 1, "b": 1}) == 1.0
    dist = pattern_distribution("герой", ["герой", "гонец"])
    assert dist == {"+++++": 1, "+^-^-": 1}


def test_rank_guesses_orders_by_bits():
    cands = ["герой", "гонец", "горох", "горка"]
    ranked = rank_guesses(cands, cands, top_k=2)
    assert len(ranked) == 2
    assert ranked[0][1] >= ranked[1][1]
    assert rank_guesses([], cands) == []


def test_suggest_move():
    assert suggest_move([])["guess"] is None
    one = suggest_move(["герой"])
    assert one["guess"] == "герой"
    assert one["expected_information_bits"] == 0.0
    many = suggest_move(["герой", "гонец", "горох", "горка"], top_k=3)
    assert many["guess"] in {"герой", "гонец", "горох", "горка"}
    assert len(many["alternatives"]) == 3
    assert many["alternatives"][0]["word"] == many["guess"]


def test_suggest_move_with_non_positive_top_k():
    cands = ["герой", "гонец", "горох", "горка"]
    for k in (0, -3):
        best = suggest_move(cands, top_k=k)
        assert best["guess"] in cands
        assert [a["word"] for a in best["alternatives"]] == [best["guess"]]
