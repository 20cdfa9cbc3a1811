# server.py
# MCP Wordle ruso – Python (FastMCP)
# - Partidas por sesion con veredicto + ^ -
# - Pistas consistentes con lo conocido
# - Busqueda por letras/patron y sugerencia por entropia

import logging
import os
import threading
from typing import Dict, Optional

from mcp.server.fastmcp import FastMCP

from wordle_ru import server as core
from wordle_ru.config import GameConfig
from wordle_ru.dictionary import load_bundled_dictionary
from wordle_ru.observer import LoggingObserver

log = logging.getLogger("wordle_ru.mcp")

# Un estado (ver wordle_ru.server) por sesion; el diccionario se comparte.
_SESSIONS: Dict[str, dict] = {}
_LOCK = threading.Lock()
_SHARED: dict = {}


def _shared() -> dict:
    with _LOCK:
        if "dictionary" not in _SHARED:
            config = GameConfig.from_env()
            _SHARED["config"] = config
            _SHARED["dictionary"] = load_bundled_dictionary(config, LoggingObserver())
    return _SHARED


def _ensure_session(session: str) -> dict:
    shared = _shared()
    with _LOCK:
        if session not in _SESSIONS:
            _SESSIONS[session] = {
                "config": shared["config"],
                "dictionary": shared["dictionary"],
            }
    return _SESSIONS[session]


mcp = FastMCP("wordle-ru")


@mcp.tool()
def new_game(session: str = "default", seed: Optional[int] = None) -> dict:
    """Empieza una partida nueva en la sesion indicada."""
    st = _ensure_session(session)
    result = core.new_game(st, seed)
    log.info("Sesion %s: partida nueva", session)
    return {"session": session, **result}


@mcp.tool()
def guess(session: str, word: str) -> dict:
    """Envia una palabra; devuelve el veredicto (+ exacta, ^ presente, - ausente)."""
    return {"session": session, **core.guess(_ensure_session(session), word)}


@mcp.tool()
def hint(session: str = "default") -> dict:
    """Una palabra del diccionario consistente con los intentos previos."""
    return {"session": session, **core.hint(_ensure_session(session))}


@mcp.tool()
def state(session: str = "default") -> dict:
    """Historial, patron conocido y restricciones acumuladas."""
    return {"session": session, **core.describe(_ensure_session(session))}


@mcp.tool()
def find_words(must_contain: str = "", must_not_contain: str = "",
               pattern: Optional[str] = None) -> dict:
    """Busca palabras con letras obligatorias/prohibidas y patron ('_' es comodin)."""
    return core.find(_ensure_session("default"), must_contain, must_not_contain, pattern)


@mcp.tool()
def suggest(session: str = "default", top_k: int = 5) -> dict:
    """Sugiere la jugada de mayor entropia entre los candidatos restantes."""
    return {"session": session, **core.suggest(_ensure_session(session), top_k)}


@mcp.tool()
def letters(n: int = 10) -> dict:
    """Letras mas frecuentes del diccionario."""
    return core.letters(_ensure_session("default"), n)


@mcp.tool()
def whoami() -> dict:
    """Informacion del servidor y diccionario."""
    shared = _shared()
    return {
        "file": __file__,
        "pid": os.getpid(),
        "version": core.VERSION,
        "words_file": shared["config"].words_file or "words.txt (paquete)",
        "dictionary_size": len(shared["dictionary"]),
        "sessions": sorted(_SESSIONS),
    }


if __name__ == "__main__":
    core.setup_logging()
    log.info("PID=%s FILE=%s", os.getpid(), __file__)
    # Solo stdio: el servidor no abre puertos
    mcp.run(transport="stdio")
