import random

import pytest

from wordle_ru.config import GameConfig
from wordle_ru.dictionary import Dictionary
from wordle_ru.game import GameSession
from wordle_ru.server import demo_cli, handle_request, main, play_console

WORDS = ["герой", "слово", "банан", "пчела", "гонец", "банка",
         "горох", "горка", "абвгд", "клоун"]


def make_state(answer="герой"):
    d = Dictionary(WORDS)
    return {
        "config": GameConfig(),
        "dictionary": d,
        "game": GameSession(d, answer, rng=random.Random(0)),
    }

def run(method, params=None, state=None):
    req = {"jsonrpc": "2.0", "id": "t", "method": method, "params": params or {}}
    resp, st = handle_request(req, state if state is not None else make_state())
    assert resp["jsonrpc"] == "2.0"
    return resp, st

def scripted(*lines):
    it = iter(lines)

    def read(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return read


def test_initialize_and_tools_list():
    resp, _ = run("initialize")
    assert resp["result"]["serverInfo"]["name"] == "wordle-ru"
    resp, _ = run("tools/list")
    names = {t["name"] for t in resp["result"]["tools"]}
    assert {"new_game", "guess", "hint", "state", "find_words", "suggest"} <= names

def test_guess_flow():
    resp, st = run("guess", {"word": "гонец"})
    assert resp["result"]["verdict"] == "+^-^-"
    assert resp["result"]["pattern"] == "г____"
    assert resp["result"]["attempts_remaining"] == 5
    resp, st = run("guess", {"word": "герой"}, st)
    assert resp["result"]["state"] == "won"
    assert resp["result"]["answer"] == "герой"

def test_guess_errors():
    resp, st = run("guess", {"word": "кот"})
    assert resp["error"]["code"] == -32602
    assert resp["error"]["data"]["error"] == "invalid_word"
    resp, st = run("guess", {"word": "яблок"}, st)
    assert resp["error"]["data"]["error"] == "not_in_dictionary"
    resp, st = run("state", state=st)
    assert resp["result"]["attempts_remaining"] == 6

def test_unknown_method_and_tool():
    resp, _ = run("nope")
    assert resp["error"]["code"] == -32601
    resp, _ = run("tools/call", {"name": "nope"})
    assert resp["error"]["code"] == -32601

def test_tools_call_guess():
    resp, _ = run("tools/call", {"name": "guess", "arguments": {"word": "слово"}})
    content = resp["result"]["content"]
    assert content[1]["json"]["verdict"] == "--^--"
    assert "слово" in content[0]["text"]

def test_hint_and_suggest():
    _, st = run("guess", {"word": "банан"})
    resp, st = run("hint", state=st)
    assert resp["result"]["hint"] in {"слово", "горох"}
    resp, st = run("suggest", {"top_k": 2}, st)
    assert resp["result"]["guess"] in {"слово", "горох", "герой"}
    assert resp["result"]["candidates"] == 3

def test_find_words_and_letters():
    resp, _ = run("find_words", {"must_contain": "О", "must_not_contain": "а", "pattern": "Г____"})
    assert resp["result"]["words"] == ["герой", "гонец", "горох"]
    resp, _ = run("find_words", {"pattern": "г_"})
    assert resp["error"]["data"]["error"] == "invalid_word"
    resp, _ = run("letters", {"n": 3})
    assert len(resp["result"]["most_common"]) == 3

def test_new_game_with_bundled_dictionary():
    resp, st = run("new_game", {"seed": 1}, {})
    assert resp["result"]["dictionary_size"] > 100
    target = st["game"].target
    resp, st = run("guess", {"word": target}, st)
    assert resp["result"]["verdict"] == "+++++"
    resp, st = run("reset", state=st)
    assert st["game"].attempts_used == 0


def test_play_console_win(capsys):
    game = make_state()["game"]
    assert play_console(game, scripted("", "гонец", "кот", "герой")) is True
    out = capsys.readouterr().out
    assert "Подсказка:" in out
    assert "Результат: +^-^-" in out
    assert "Ошибка" in out
    assert "ПОБЕДА" in out

def test_play_console_stop(capsys):
    game = make_state()["game"]
    assert play_console(game, scripted("стоп")) is False
    assert not game.is_over

def test_demo_cli_quits(capsys):
    demo_cli(seed=1, read=scripted("СТОП"))
    assert "До свидания" in capsys.readouterr().out

def test_suggest_with_negative_top_k():
    resp, _ = run("suggest", {"top_k": -1})
    assert "error" not in resp
    assert len(resp["result"]["alternatives"]) == 1

def test_main_exits_when_dictionary_fails(monkeypatch, tmp_path, caplog):
    monkeypatch.setenv("WORDLE_WORDS_FILE", str(tmp_path / "missing.txt"))
    for argv in ([], ["--demo"]):
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 1
    assert "No se pudo cargar el diccionario" in caplog.text
