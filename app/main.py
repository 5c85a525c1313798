from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
import logging
from pydantic import BaseModel, Field

from boxy import UpstreamError, build_backend
from boxy import tictactoe
from boxy.conversation import ConversationTurn
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
# httpx logs full request URLs at INFO, and the Gemini key rides in the query string
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger("boxy")

_STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Boxy.ai Chat", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.is_dev:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class ChatRequest(BaseModel):
    conversation: List[ConversationTurn] = Field(
        ...,
        min_length=1,
        description="Full chat history, oldest first (frontend-managed)",
    )


class MoveRequest(BaseModel):
    board: List[Optional[str]]
    x_is_next: bool = True
    index: int = Field(..., ge=0, le=tictactoe.BOARD_SIZE - 1)


class MoveResponse(BaseModel):
    board: List[Optional[str]]
    x_is_next: bool
    winner: Optional[str]
    draw: bool
    status: str


@app.post("/api/gemini")
def chat(req: ChatRequest) -> Any:
    settings = get_settings()
    if not settings.gemini_api_key:
        return JSONResponse(status_code=500, content={"error": "Missing GEMINI_API_KEY"})

    logger.info(
        "Incoming chat: backend=%s model=%s turns=%s",
        settings.chat_backend,
        settings.gemini_model,
        len(req.conversation),
    )
    try:
        backend = build_backend(settings)
        reply = backend.generate(req.conversation)
    except UpstreamError as e:
        logger.exception("Upstream model call failed: %s", e)
        return JSONResponse(status_code=502, content={"error": str(e)})
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    logger.info("Model responded with %s chars", len(reply))
    return {"reply": reply}


@app.post("/api/tictactoe/move", response_model=MoveResponse)
def tictactoe_move(req: MoveRequest) -> MoveResponse:
    try:
        state = tictactoe.GameState(board=req.board, x_is_next=req.x_is_next)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    state = tictactoe.play(state, req.index)
    return MoveResponse(
        board=state.board,
        x_is_next=state.x_is_next,
        winner=tictactoe.calculate_winner(state.board),
        draw=tictactoe.is_draw(state.board),
        status=tictactoe.status(state),
    )


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/", include_in_schema=False)
def serve_root() -> FileResponse:
    return FileResponse(_STATIC_DIR / "index.html")


# Mounted last so the API routes above win
app.mount("/static", StaticFiles(directory=_STATIC_DIR), name="static")
