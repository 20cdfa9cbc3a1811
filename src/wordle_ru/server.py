from __future__ import annotations
import argparse
import json
import logging
import random
import sys
from typing import Dict, List, Optional, Tuple

from .config import GameConfig
from .dictionary import Dictionary, load_bundled_dictionary
from .engine import suggest_move
from .errors import GameAlreadyOver, LoadError, WordleError
from .filtering import find_words
from .game import GameSession, new_session
from .normalize import normalize
from .observer import LoggingObserver

VERSION = "0.1.0"

log = logging.getLogger("wordle_ru")


def setup_logging(level: int = logging.INFO) -> None:
    """stdout queda para el protocolo; todo el log va a stderr."""
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="[%(levelname)s] %(message)s",
    )


# -------------------- JSON-RPC helpers --------------------
def jsonrpc_ok(id_, result):
    return {"jsonrpc": "2.0", "id": id_, "result": result}

def jsonrpc_error(id_, code, message, data=None):
    error = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": id_, "error": error}


# -------------------- Operaciones sobre el estado --------------------
# state: {"config", "dictionary", "game"}; cada clave se crea perezosamente.

def _ensure_state(state: dict) -> dict:
    if "config" not in state:
        state["config"] = GameConfig.from_env()
    if "dictionary" not in state:
        state["dictionary"] = load_bundled_dictionary(state["config"], LoggingObserver())
    return state


def _game(state: dict) -> GameSession:
    _ensure_state(state)
    if state.get("game") is None:
        new_game(state)
    return state["game"]


def new_game(state: dict, seed: Optional[int] = None) -> dict:
    _ensure_state(state)
    rng = random.Random(seed)
    game = new_session(state["dictionary"], rng=rng, observer=LoggingObserver(),
                       config=state["config"])
    state["game"] = game
    return {
        "word_length": game.config.word_length,
        "max_attempts": game.max_attempts,
        "dictionary_size": len(game.dictionary),
        "pattern": game.pattern(),
    }


def guess(state: dict, word: str) -> dict:
    game = _game(state)
    attempt = game.submit_guess(word).unwrap()
    return {
        "guess": attempt.word,
        "verdict": str(attempt.verdict),
        "state": game.state.value,
        "attempts_remaining": game.attempts_remaining,
        "pattern": game.pattern(),
        "answer": game.answer,
    }


def hint(state: dict) -> dict:
    game = _game(state)
    word = game.request_hint().unwrap()
    return {"hint": word, "available": word is not None}


def describe(state: dict) -> dict:
    return _game(state).summary()


def find(state: dict, must_contain: str = "", must_not_contain: str = "",
         pattern: Optional[str] = None, limit: int = 50) -> dict:
    _ensure_state(state)
    config: GameConfig = state["config"]
    words = find_words(
        state["dictionary"],
        must_contain=normalize(must_contain, config),
        must_not_contain=normalize(must_not_contain, config),
        pattern=normalize(pattern, config) if pattern else None,
        placeholder=config.placeholder,
        word_length=config.word_length,
    )
    return {"count": len(words), "words": words[:limit]}


def suggest(state: dict, top_k: int = 5, sample_answers: Optional[int] = 500) -> dict:
    """Mejor palabra por entropia entre los candidatos de la partida en curso."""
    game = _game(state)
    if game.is_over:
        raise GameAlreadyOver()
    cands = game.candidates()
    best = suggest_move(cands, top_k=top_k, sample_answers=sample_answers,
                        limit_guess_pool=2000, rng=random.Random(len(cands)))
    best["candidates"] = len(cands)
    return best


def letters(state: dict, n: int = 10) -> dict:
    _ensure_state(state)
    dictionary: Dictionary = state["dictionary"]
    return {
        "most_common": dictionary.most_common_letters(n),
        "frequency": dict(dictionary.letter_frequency()),
    }


def reset(state: dict) -> dict:
    state.pop("game", None)
    return new_game(state)


# -------------------- MCP "tools" descriptors --------------------
def _tool(name, description, properties=None, required=None):
    return {
        "name": name,
        "description": description,
        "inputSchema": {
            "type": "object",
            "properties": properties or {},
            "required": required or [],
        },
    }


def tools_descriptor():
    return {
        "tools": [
            _tool("new_game", "Empieza una partida nueva",
                  {"seed": {"type": ["integer", "null"]}}),
            _tool("guess", "Envia una palabra y devuelve el veredicto + ^ -",
                  {"word": {"type": "string"}}, ["word"]),
            _tool("hint", "Pide una palabra consistente con lo conocido"),
            _tool("state", "Estado de la partida: historial, patron, restricciones"),
            _tool("find_words", "Busca palabras por letras obligatorias/prohibidas y patron",
                  {
                      "must_contain": {"type": "string"},
                      "must_not_contain": {"type": "string"},
                      "pattern": {"type": ["string", "null"],
                                  "description": "Una letra por posicion, '_' es comodin"},
                  }),
            _tool("suggest", "Sugiere la jugada de mayor entropia",
                  {"top_k": {"type": "integer"}}),
            _tool("letters", "Letras mas frecuentes del diccionario",
                  {"n": {"type": "integer"}}),
            _tool("reset", "Reinicia la partida"),
        ],
        "nextCursor": None,
    }


TOOLS = {
    "new_game": lambda state, a: new_game(state, a.get("seed")),
    "guess": lambda state, a: guess(state, a.get("word") or ""),
    "hint": lambda state, a: hint(state),
    "state": lambda state, a: describe(state),
    "find_words": lambda state, a: find(
        state, a.get("must_contain") or "", a.get("must_not_contain") or "", a.get("pattern")
    ),
    "suggest": lambda state, a: suggest(state, int(a.get("top_k") or 5)),
    "letters": lambda state, a: letters(state, int(a.get("n") or 10)),
    "reset": lambda state, a: reset(state),
}


# -------------------- Core handler --------------------
def handle_request(req: dict, state: dict) -> Tuple[dict, dict]:
    mid = req.get("id")
    method = req.get("method")
    params = req.get("params") or {}

    try:
        if method == "initialize":
            return jsonrpc_ok(mid, {
                "protocolVersion": "2025-06-18",
                "serverInfo": {"name": "wordle-ru", "version": VERSION},
                "capabilities": {"tools": {}},
            }), state

        if method == "tools/list":
            return jsonrpc_ok(mid, tools_descriptor()), state

        if method == "tools/call":
            name = params.get("name")
            arguments = params.get("arguments") or {}
            if name not in TOOLS:
                return jsonrpc_error(mid, -32601, f"Tool not found: {name}"), state
            payload = TOOLS[name](state, arguments)
            return jsonrpc_ok(mid, {
                "content": [
                    {"type": "text", "text": json.dumps(payload, ensure_ascii=False)},
                    {"type": "json", "json": payload},
                ]
            }), state

        # ---- Metodos directos (comodidad para pruebas) ----
        if method in TOOLS:
            return jsonrpc_ok(mid, TOOLS[method](state, params)), state

        return jsonrpc_error(mid, -32601, "Method not found"), state

    except WordleError as e:
        return jsonrpc_error(mid, -32602, str(e), {"error": e.code}), state
    except Exception as e:
        log.exception("Error interno procesando %s", method)
        return jsonrpc_error(mid, -32603, f"Internal error: {e}"), state


# -------------------- IO loops --------------------
def run_stdio(state: Optional[Dict] = None):
    state = {} if state is None else state
    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        try:
            req = json.loads(line)
        except json.JSONDecodeError:
            print(json.dumps(jsonrpc_error(None, -32700, "Parse error")), flush=True)
            continue
        resp, state = handle_request(req, state)
        print(json.dumps(resp, ensure_ascii=False), flush=True)


def _banner(config: GameConfig):
    line = "=" * 50
    print(f"\n{line}")
    print("Добро пожаловать в Wordle на русском языке!")
    print(f"У вас есть {config.max_attempts} попыток, чтобы угадать "
          f"{config.word_length}-буквенное слово.")
    print(line)
    print("Подсказки:")
    print("  + — буква на правильном месте")
    print("  ^ — буква есть, но не на этом месте")
    print("  - — буквы нет в слове")
    print("\nКоманды:")
    print("  Нажмите Enter — получить подсказку")
    print("  'стоп' — выйти из игры")
    print(f"{line}\n")


def play_console(game: GameSession, read=input) -> bool:
    """Un juego por consola. Retorna False si el jugador escribio 'стоп' o cerro la entrada."""
    _banner(game.config)
    while not game.is_over:
        try:
            raw = read("Введите слово (или нажмите Enter для подсказки): ").strip()
        except EOFError:
            return False

        if not raw:
            word = game.request_hint().value
            if word is not None:
                print(f"Подсказка: {word}\n")
            else:
                print("Подсказки временно недоступны.\n")
            continue

        if raw.lower() == "стоп":
            print("\nИгра остановлена.")
            return False

        outcome = game.submit_guess(raw)
        if not outcome.ok:
            print(f"❌ Ошибка: {outcome.error}\n")
            continue
        print(f"Результат: {outcome.value.verdict}\n")
        if not game.is_over:
            print(f"Осталось попыток: {game.attempts_remaining}")

    print("\n" + "=" * 50)
    if game.is_won:
        print(f"🎉 ПОБЕДА! Слово угадано за {game.attempts_used} попыток!")
    else:
        print("😔 К сожалению, вы не угадали слово.")
        print(f"Загаданное слово было: {game.answer}")
    print("\nИстория попыток:")
    for i, attempt in enumerate(game.attempts, 1):
        print(f"{i:2d}. {attempt.word} → {attempt.verdict}")
    print("=" * 50)
    return True


def demo_cli(seed: Optional[int] = None, read=input, state: Optional[Dict] = None):
    state = _ensure_state({} if state is None else state)
    rng = random.Random(seed)
    while True:
        game = new_session(state["dictionary"], rng=rng, observer=LoggingObserver(),
                           config=state["config"])
        if not play_console(game, read):
            break
        try:
            answer = read("\nХотите сыграть ещё раз? (да/нет): ").strip().lower()
        except EOFError:
            break
        if answer not in ("да", "yes", "y"):
            break
        print("\n" + "=" * 50 + "\nНОВАЯ ИГРА\n" + "=" * 50)
    print("\nСпасибо за игру! До свидания!")


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Wordle en ruso: servidor JSON-RPC por stdio")
    parser.add_argument("--demo", action="store_true", help="Juego interactivo en consola")
    parser.add_argument("--seed", type=int, default=None, help="Semilla para la palabra oculta")
    parser.add_argument("--debug", action="store_true", help="Log a nivel DEBUG")
    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.WARNING if args.demo else logging.INFO)

    # el diccionario se carga antes de atender: sin palabras no hay partida
    try:
        state = _ensure_state({})
    except LoadError as e:
        log.critical("No se pudo cargar el diccionario: %s", e)
        sys.exit(1)
    demo_cli(args.seed, state=state) if args.demo else run_stdio(state)


if __name__ == "__main__":
    main()
