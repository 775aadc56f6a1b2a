"""REST service that hosts Briscola tables.

The service is the host process: it keeps one ``GameHost`` per table, takes
player commands, and hands out per-player views plus the full snapshot for
whatever sync layer relays it to the other participants.
"""

from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from briscola.errors import ConfigurationError
from briscola.host import CommandResult, GameHost
from briscola.modes import GameMode
from briscola.rules_schema import TableSettings
from briscola.snapshot import state_to_payload

from .logging_config import setup_logging

logger = logging.getLogger(__name__)


class StartRequest(BaseModel):
    players: List[str] = Field(..., min_length=2, description="Player ids in seat order.")
    mode: Optional[GameMode] = Field(None, description="Defaults to the mode for the player count.")
    teams: Optional[Dict[str, int]] = Field(None, description="2v2 team per player (1 or 2).")


class CardRequest(BaseModel):
    player: str
    card_id: str


settings = TableSettings.from_env()
tables: Dict[str, GameHost] = {}


app = FastAPI(title="Briscola Table Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def ensure_table(table_id: str) -> GameHost:
    host = tables.get(table_id)
    if host is None or host.state is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return host


def command_response(host: GameHost, result: CommandResult, player: Optional[str]) -> Dict[str, object]:
    return {
        "accepted": result.accepted,
        "reason": result.reason,
        "version": result.version,
        "state": host.view(player),
    }


@app.post("/tables")
async def start_table(request: StartRequest) -> Dict[str, object]:
    host = GameHost(settings)
    try:
        await host.start_game(request.players, mode=request.mode, teams=request.teams)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    table_id = uuid.uuid4().hex
    tables[table_id] = host
    logger.info("Created table", extra={"table_id": table_id})
    return {"table_id": table_id, "version": host.version, "state": host.view()}


@app.get("/tables/{table_id}")
def get_view(table_id: str, player: Optional[str] = None) -> Dict[str, object]:
    host = ensure_table(table_id)
    return {"version": host.version, "state": host.view(player)}


@app.get("/tables/{table_id}/snapshot")
def get_snapshot(table_id: str) -> Dict[str, object]:
    host = ensure_table(table_id)
    assert host.state is not None
    return {"version": host.version, "snapshot": state_to_payload(host.state)}


@app.post("/tables/{table_id}/play")
async def play_card(table_id: str, request: CardRequest) -> Dict[str, object]:
    host = ensure_table(table_id)
    result = await host.play_card(request.player, request.card_id)
    return command_response(host, result, request.player)


@app.post("/tables/{table_id}/swap")
async def swap_trump(table_id: str, request: CardRequest) -> Dict[str, object]:
    host = ensure_table(table_id)
    result = await host.swap_with_trump(request.player, request.card_id)
    return command_response(host, result, request.player)


@app.post("/tables/{table_id}/resolve")
async def resolve_round(table_id: str) -> Dict[str, object]:
    host = ensure_table(table_id)
    result = await host.resolve_round()
    return command_response(host, result, None)


@app.post("/tables/{table_id}/play-again")
async def play_again(table_id: str) -> Dict[str, object]:
    host = ensure_table(table_id)
    await host.play_again()
    return {"version": host.version, "state": host.view()}


@app.delete("/tables/{table_id}")
async def close_table(table_id: str) -> Dict[str, object]:
    host = ensure_table(table_id)
    await host.close()
    del tables[table_id]
    return {"closed": table_id}


def main() -> None:
    import uvicorn

    setup_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000, log_config=None)


if __name__ == "__main__":
    main()
