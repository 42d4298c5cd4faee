from __future__ import annotations

import asyncio
import os
import uuid
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Any, Dict, Optional, Set

from rpsmatch import InvalidOperation, MatchEngine, MatchSession, Move, RoundResult


app = FastAPI(title="RPS Match API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("ALLOW_ORIGINS", "*").split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

WIN_LIMIT = int(os.getenv("WIN_LIMIT", "5"))
THINK_DELAY = int(os.getenv("THINK_DELAY_MS", "700")) / 1000.0
REVEAL_DELAY = int(os.getenv("REVEAL_DELAY_MS", "500")) / 1000.0

# In-memory only; a restart forgets every match
sessions: Dict[str, MatchSession] = {}


def new_engine() -> MatchEngine:
    return MatchEngine(win_limit=WIN_LIMIT)


class MoveReq(BaseModel):
    move: str


class MatchRes(BaseModel):
    match_id: str
    snapshot: Dict[str, Any]


class RoundRes(BaseModel):
    round: Dict[str, Any]
    snapshot: Dict[str, Any]


def get_session(match_id: str) -> MatchSession:
    s = sessions.get(match_id)
    if s is None:
        raise HTTPException(status_code=404, detail=f"unknown match: {match_id}")
    return s


def parse_move(raw: Any) -> Move:
    try:
        return Move.parse(raw)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


async def play(session: MatchSession, raw: Any) -> RoundResult:
    move = parse_move(raw)
    try:
        return await session.play(move)
    except InvalidOperation as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.get("/")
def root():
    return {"ok": True, "service": "RPS match backend", "win_limit": WIN_LIMIT}


@app.get("/healthz")
def healthz():
    return {"status": "healthy"}


@app.post("/matches", response_model=MatchRes)
def create_match():
    match_id = uuid.uuid4().hex
    session = MatchSession(new_engine(), think_delay=THINK_DELAY, reveal_delay=REVEAL_DELAY)
    sessions[match_id] = session
    return MatchRes(match_id=match_id, snapshot=session.snapshot().to_dict())


@app.get("/matches/{match_id}", response_model=MatchRes)
def get_match(match_id: str):
    session = get_session(match_id)
    return MatchRes(match_id=match_id, snapshot=session.snapshot().to_dict())


@app.post("/matches/{match_id}/move", response_model=RoundRes)
async def move(match_id: str, req: MoveReq):
    session = get_session(match_id)
    result = await play(session, req.move)
    return RoundRes(round=result.to_dict(), snapshot=session.snapshot().to_dict())


@app.post("/matches/{match_id}/play-again", response_model=MatchRes)
async def play_again(match_id: str):
    session = get_session(match_id)
    try:
        snap = await session.play_again()
    except InvalidOperation as e:
        raise HTTPException(status_code=409, detail=str(e))
    return MatchRes(match_id=match_id, snapshot=snap.to_dict())


@app.post("/matches/{match_id}/exit")
async def exit_match(match_id: str):
    session = get_session(match_id)
    try:
        await session.exit_to_menu()
    except InvalidOperation as e:
        raise HTTPException(status_code=409, detail=str(e))
    sessions.pop(match_id, None)
    return {"ok": True}


# Live view: every snapshot of the match is pushed; clients may also play through it
@app.websocket("/ws/{match_id}")
async def ws_endpoint(ws: WebSocket, match_id: str):
    session: Optional[MatchSession] = sessions.get(match_id)
    if session is None:
        await ws.close(code=4404)
        return
    await ws.accept()

    async def push(snap):
        try:
            await ws.send_json({"type": "snapshot", "snapshot": snap.to_dict()})
        except Exception:
            # socket already gone; unsubscribed in the finally below
            pass

    async def send_error(status: int, detail: Any):
        await ws.send_json({"type": "error", "status": status, "detail": detail})

    async def handle(raw: Any):
        try:
            await play(session, raw)
        except HTTPException as e:
            try:
                await send_error(e.status_code, e.detail)
            except Exception:
                pass

    # Each move runs as its own task so the loop keeps reading and a move
    # sent mid-round hits the session's busy guard instead of queueing.
    tasks: Set[asyncio.Task] = set()
    unsubscribe = session.subscribe(push)
    try:
        await push(session.snapshot())
        while True:
            try:
                msg = await ws.receive_json()
            except ValueError:
                await send_error(422, "message is not valid JSON")
                continue
            if sessions.get(match_id) is not session:
                await send_error(404, f"match ended: {match_id}")
                await ws.close(code=4404)
                return
            task = asyncio.create_task(handle(msg.get("move") if isinstance(msg, dict) else None))
            tasks.add(task)
            task.add_done_callback(tasks.discard)
    except WebSocketDisconnect:
        pass
    finally:
        unsubscribe()
        for task in list(tasks):
            task.cancel()
