"""
FastAPI app exposing the analyst chat and the player statistics operations.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from agentscope.agent import ReActAgent
from agentscope.message import Msg

from pitchside.agents.player_chat import build_chat_agent
from pitchside.services.player_stats import (
    PlayerStatsGateway,
    ToolResult,
    default_gateway,
)


app = FastAPI(title="Pitchside API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@dataclass
class AgentSession:
    agent: ReActAgent
    last_used: float


class ChatRequest(BaseModel):
    session_id: Optional[str] = None
    message: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    session_id: str
    reply: str


class CompareRequest(BaseModel):
    player_ids: List[int] = Field(..., min_length=2)
    chart_type: Literal["radar", "bar"] = "bar"
    categories: Optional[List[int]] = None


_chat_sessions: Dict[str, AgentSession] = {}
_session_locks: Dict[str, asyncio.Lock] = {}

SESSION_TTL_SECONDS = 60 * 60  # one hour
MAX_SESSIONS = 20


def _gateway() -> PlayerStatsGateway:
    return default_gateway()


def _unwrap(result: ToolResult) -> Any:
    """Raise gateway error strings as HTTP errors, keyed on their status code.

    A ``no_statistics`` object is a result, not an error: it still carries the
    player's identity.
    """
    if isinstance(result, str):
        status_code = getattr(result, "status_code", None)
        if status_code in (400, 404):
            raise HTTPException(status_code=status_code, detail=str(result))
        raise HTTPException(status_code=502, detail=str(result))
    return result


def _prune_sessions(now: Optional[float] = None) -> None:
    timestamp = now or time.time()
    expired_ids = [
        session_id
        for session_id, session in _chat_sessions.items()
        if (timestamp - session.last_used) > SESSION_TTL_SECONDS
    ]
    for session_id in expired_ids:
        _chat_sessions.pop(session_id, None)
        _session_locks.pop(session_id, None)

    if len(_chat_sessions) <= MAX_SESSIONS:
        return

    oldest_first = sorted(_chat_sessions.items(), key=lambda item: item[1].last_used)
    for session_id, _session in oldest_first:
        if len(_chat_sessions) <= MAX_SESSIONS:
            break
        _chat_sessions.pop(session_id, None)
        _session_locks.pop(session_id, None)


def _get_or_create_agent(session_id: str) -> ReActAgent:
    now = time.time()
    existing = _chat_sessions.get(session_id)
    if existing:
        existing.last_used = now
        return existing.agent

    agent = build_chat_agent(gateway=_gateway())
    _chat_sessions[session_id] = AgentSession(agent=agent, last_used=now)
    _session_locks[session_id] = asyncio.Lock()
    _prune_sessions(now=now)
    return agent


def _get_session_lock(session_id: str) -> asyncio.Lock:
    lock = _session_locks.get(session_id)
    if lock is None:
        lock = asyncio.Lock()
        _session_locks[session_id] = lock
    return lock


@app.get("/api/health")
def health() -> Dict[str, str]:
    return {"status": "ok", "source": _gateway().source}


@app.get("/api/players/search")
async def search_players(name: str = Query(..., min_length=1)) -> List[Dict[str, Any]]:
    return _unwrap(await _gateway().search_players(name))


@app.get("/api/players/{player_id}/analysis")
async def player_analysis(player_id: int) -> Dict[str, Any]:
    return _unwrap(await _gateway().analyze_player(player_id))


@app.get("/api/players/{player_id}/history")
async def player_history(player_id: int) -> Dict[str, Any]:
    return _unwrap(await _gateway().analyze_historical_stats(player_id))


@app.post("/api/players/compare")
async def compare_players(request: CompareRequest) -> Dict[str, Any]:
    result = await _gateway().compare_players(
        request.player_ids,
        request.chart_type,
        request.categories,
    )
    return _unwrap(result)


@app.post("/api/chat", response_model=ChatResponse)
async def agent_chat(request: ChatRequest) -> ChatResponse:
    session_id = request.session_id or str(uuid4())
    agent = _get_or_create_agent(session_id)
    lock = _get_session_lock(session_id)

    async with lock:
        reply_msg = await agent.reply(
            Msg(name="user", role="user", content=request.message.strip())
        )

    return ChatResponse(session_id=session_id, reply=reply_msg.get_text_content() or "")


@app.delete("/api/chat/{session_id}")
def reset_agent_session(session_id: str) -> Dict[str, str]:
    removed = _chat_sessions.pop(session_id, None)
    _session_locks.pop(session_id, None)
    return {
        "session_id": session_id,
        "status": "reset" if removed else "not-found",
    }


@app.get("/")
def index() -> Dict[str, Any]:
    return {
        "name": "Pitchside API",
        "version": app.version,
        "endpoints": [
            "/api/health",
            "/api/players/search",
            "/api/players/{player_id}/analysis",
            "/api/players/{player_id}/history",
            "/api/players/compare",
            "/api/chat",
            "/api/chat/{session_id}",
        ],
    }
