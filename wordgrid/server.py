import logging
import random
import threading
from contextlib import asynccontextmanager

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from wordgrid.settings import Settings, settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("wordgrid")


class SolveSequencer:
    """Hands out increasing sequence numbers so clients can ignore stale results."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value


def apply_log_level(cfg: Settings = settings):
    logger.setLevel(logging.DEBUG if cfg.DEBUG else logging.INFO)


def _rng(payload: dict) -> random.Random:
    seed = payload.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise HTTPException(422, f"seed must be an integer, got {seed!r}")
    return random.Random(seed)


def create_app() -> FastAPI:
    from wordgrid.dictionary import LexiconGate

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        apply_log_level(settings)
        lexicon = await application.state.gate.load_async(settings.DICTIONARY_PATH)
        logger.info("Lexicon ready (%d words)", len(lexicon))
        yield

    application = FastAPI(title="Word Grid Solver", lifespan=lifespan)
    application.state.gate = LexiconGate()
    application.state.sequencer = SolveSequencer()

    def _lexicon():
        from wordgrid.errors import LexiconNotReady

        try:
            return application.state.gate.get()
        except LexiconNotReady as e:
            raise HTTPException(503, str(e))

    def _solve_response(lexicon, board, payload: dict, tiles=None) -> JSONResponse:
        """Solve ``board`` and serialize it the way every board endpoint answers."""
        from wordgrid.board import parse_board
        from wordgrid.errors import InvalidBoard
        from wordgrid.metrics import StageTimer
        from wordgrid.results import DISPLAY_MODES
        from wordgrid.solver import solve as solve_board

        mode = payload.get("mode", settings.RANK_DISPLAY_MODE)
        if mode not in DISPLAY_MODES:
            raise HTTPException(422, f"Unknown mode {mode!r}, expected one of {list(DISPLAY_MODES)}")

        min_len = payload.get("min_word_length", settings.MIN_WORD_LENGTH)
        if isinstance(min_len, bool) or not isinstance(min_len, int) or min_len < 1:
            raise HTTPException(422, f"min_word_length must be a positive integer, got {min_len!r}")

        timer = StageTimer()
        sequence = application.state.sequencer.next()

        try:
            with timer.stage("validate"):
                if isinstance(board, str):
                    board = parse_board(board)
                elif board is None:
                    raise InvalidBoard("Missing 'board'")

            with timer.stage("solve") as counts:
                result = solve_board(board, lexicon, min_len, sequence=sequence)
                counts["words"] = len(result)
                counts["paths"] = result.path_count
        except InvalidBoard as e:
            logger.info("Rejected board (seq=%d): %s", sequence, e)
            raise HTTPException(422, str(e))

        with timer.stage("analytics"):
            body = result.to_dict(mode, limit=settings.MAX_RESULTS)

        logger.info(
            "seq=%d found %d words (max usage %d) in %.1fms",
            sequence, len(result), body["max_usage"], timer.total_ms,
        )
        if tiles is not None:
            body["board"] = board
            body["tiles"] = [t.to_dict() for t in tiles]
        body["processing_time"] = timer.total_ms
        body["stage_timings"] = timer.summary()
        body["stage_counts"] = timer.counts
        return JSONResponse(body)

    def _mutated_response(lexicon, payload: dict, mutate) -> JSONResponse:
        from wordgrid.dice import to_board
        from wordgrid.errors import InvalidBoard

        try:
            tiles = mutate()
        except InvalidBoard as e:
            raise HTTPException(422, str(e))
        return _solve_response(lexicon, to_board(tiles), payload, tiles)

    @application.get("/health")
    async def health():
        gate = application.state.gate
        return {
            "status": "ok",
            "lexicon_ready": gate.ready,
            "word_count": len(gate.get()) if gate.ready else 0,
        }

    # Plain def: FastAPI runs these in its threadpool so the search does not block the loop
    @application.post("/solve")
    def solve(payload: dict):
        lexicon = _lexicon()
        return _solve_response(lexicon, payload.get("board"), payload)

    @application.post("/deal")
    def deal(payload: dict | None = Body(None)):
        from wordgrid.dice import deal as deal_tiles

        payload = payload or {}
        lexicon = _lexicon()
        rng = _rng(payload)
        return _mutated_response(lexicon, payload, lambda: deal_tiles(rng))

    @application.post("/reroll")
    def reroll(payload: dict):
        from wordgrid.dice import reroll as reroll_tile, tiles_from_json

        lexicon = _lexicon()
        rng = _rng(payload)
        return _mutated_response(
            lexicon, payload,
            lambda: reroll_tile(tiles_from_json(payload.get("tiles")), payload.get("index"), rng),
        )

    @application.post("/swap")
    def swap(payload: dict):
        from wordgrid.dice import swap as swap_tiles, tiles_from_json

        lexicon = _lexicon()
        return _mutated_response(
            lexicon, payload,
            lambda: swap_tiles(tiles_from_json(payload.get("tiles")), payload.get("i"), payload.get("j")),
        )

    @application.get("/api/settings")
    async def api_get_settings():
        from wordgrid.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from wordgrid.settings import update_settings, get_editable_settings
        body = await request.json()
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object")
        errors = update_settings(settings, **body)
        if "DEBUG" in body and "DEBUG" not in errors:
            apply_log_level(settings)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
