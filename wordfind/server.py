import asyncio
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from wordfind.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordfind")

# These will be populated at startup
_dictionary = None
_finder = None
_game = None


def _round_end_hook():
    """Push a round summary when a ntfy topic is configured."""
    from wordfind.notifier import send_notification

    def on_round_end(rnd):
        if not settings.NTFY_TOPIC or _game is None:
            return
        asyncio.get_running_loop().create_task(send_notification(
            sorted(rnd.words_found), _game.words, _game.board.letters(),
            settings.NTFY_TOPIC, settings.NTFY_URL,
        ))

    return on_round_end


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _dictionary, _finder, _game

        if settings.DEBUG:
            logger.setLevel(logging.DEBUG)

        from wordfind.dictionary import load_dictionary
        from wordfind.finder import BatchFinder
        from wordfind.game import Game
        from wordfind.settings import game_config

        logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
        _dictionary = load_dictionary(str(settings.DICTIONARY_PATH), settings.MIN_WORD_LENGTH)

        loop = asyncio.get_running_loop()
        _finder = BatchFinder(
            _dictionary.words,
            max_workers=settings.FINDER_WORKERS,
            dispatch=loop.call_soon_threadsafe,
        )
        config = game_config(settings, _dictionary, on_round_end=_round_end_hook())
        _game = Game(config, _finder, schedule=lambda cb: loop.call_later(settings.TICK_INTERVAL, cb))
        logger.info("Board search pool started (%d workers)", settings.FINDER_WORKERS)

        yield

        _finder.shutdown(wait=False)
        _game = _finder = _dictionary = None

    application = FastAPI(title="Wordfind", lifespan=lifespan)

    def _require_round():
        if _game is None or _game.board is None:
            raise HTTPException(409, "No round has been started")
        return _game

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "dictionary_words": len(_dictionary) if _dictionary is not None else 0,
        }

    @application.post("/round")
    async def new_round(request: Request):
        from wordfind.board import Board
        from wordfind.game import ConfigError
        from wordfind.settings import game_config

        body = await request.body()
        rows = None
        if body:
            payload = await request.json()
            if not isinstance(payload, dict):
                raise HTTPException(400, "Expected a JSON object")
            rows = payload.get("board")

        board = None
        if rows is not None:
            try:
                board = Board.from_letters(rows)
            except (TypeError, ValueError) as e:
                raise HTTPException(400, f"Invalid board: {e}")

        # Pick up settings edited since the last round
        try:
            _game.config = game_config(settings, _dictionary, on_round_end=_round_end_hook())
        except ConfigError as e:
            raise HTTPException(400, str(e))

        _game.new_round(board)
        return JSONResponse(_game.snapshot(), status_code=202)

    @application.get("/round")
    async def get_round():
        return JSONResponse(_require_round().snapshot())

    @application.post("/round/submit")
    async def submit_word(request: Request):
        game = _require_round()
        payload = await request.json()
        word = payload.get("word") if isinstance(payload, dict) else None
        if not isinstance(word, str):
            raise HTTPException(400, "Expected {\"word\": <string>}")
        accepted = game.submit(word)
        logger.info("Submitted %r accepted=%s", word, accepted)
        return JSONResponse({"word": word, "accepted": accepted, **game.snapshot()})

    @application.get("/round/preview")
    async def preview_word(word: str = ""):
        game = _require_round()
        path = game.preview(word)
        game.board.highlight(path)
        return JSONResponse({
            "word": word,
            "path": [list(p) for p in path] if path is not None else None,
            "board": game.board.to_json(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from wordfind.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordfind.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()
