import server


def test_session_round_trip():
    started = server.new_game("t1", seed=3)
    assert started["session"] == "t1"
    target = server._SESSIONS["t1"]["game"].target

    miss = next(w for w in server._SESSIONS["t1"]["dictionary"] if w != target)
    result = server.guess("t1", miss)
    assert len(result["verdict"]) == 5
    assert server.state("t1")["attempts_used"] == 1

    result = server.guess("t1", target)
    assert result["verdict"] == "+++++"
    assert result["state"] == "won"


def test_sessions_share_dictionary():
    server.new_game("a", seed=1)
    server.new_game("b", seed=2)
    assert server._SESSIONS["a"]["dictionary"] is server._SESSIONS["b"]["dictionary"]
    assert server.whoami()["dictionary_size"] == len(server._SESSIONS["a"]["dictionary"])


def test_find_words_tool():
    found = server.find_words(must_contain="г", pattern="гер__")
    assert "герой" in found["words"]
