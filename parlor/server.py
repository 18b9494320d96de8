from __future__ import annotations

import argparse
import asyncio
import json
import logging
import random
from dataclasses import asdict
from http import HTTPStatus
from typing import Any, Dict, Optional

from websockets.asyncio.server import ServerConnection, serve
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

from drawpoker.bots import POLICIES
from drawpoker.game import GameEngine
from drawpoker.models import GameConfig, InvalidPhaseAction

LOGGER = logging.getLogger("parlor")

PROTOCOL_VERSION = 1


class TableError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


def _config_payload(config: GameConfig, policy_name: str) -> Dict[str, Any]:
    return {
        "variant": "FIVE_CARD_DRAW",
        "hand_size": 5,
        "max_discards": config.max_discards,
        "computer": policy_name,
    }


# One TableSession per connection; each owns its own engine and dealer RNG.


class TableSession:
    """Drives a GameEngine from JSON frames sent by a single renderer."""

    def __init__(self, websocket: ServerConnection, engine: GameEngine, label: str = "REMOTE") -> None:
        self.websocket = websocket
        self.engine = engine
        self.label = label

    async def send_json(self, payload: Dict[str, Any]) -> None:
        await self.websocket.send(json.dumps({"v": PROTOCOL_VERSION, **payload}))

    async def send_error(self, code: str, msg: str) -> None:
        await self.send_json({"type": "error", "code": code, "msg": msg})

    async def send_state(self) -> None:
        await self.send_json({"type": "state", **self.engine.snapshot_payload()})

    async def run(self) -> None:
        await self.send_state()
        async for raw in self.websocket:
            await self.handle_raw(raw)

    async def handle_raw(self, raw: Any) -> None:
        try:
            message = json.loads(raw)
        except (TypeError, ValueError):
            await self.send_error("BAD_JSON", "Frames must be JSON objects")
            return
        if not isinstance(message, dict):
            await self.send_error("BAD_JSON", "Frames must be JSON objects")
            return
        try:
            await self.handle_message(message)
        except TableError as exc:
            LOGGER.warning("Rejected %s from %s: %s", message.get("type"), self.label, exc.msg)
            await self.send_error(exc.code, exc.msg)

    async def handle_message(self, message: Dict[str, Any]) -> None:
        msg_type = message.get("type")
        try:
            if msg_type == "deal":
                self.engine.deal()
            elif msg_type == "toggle":
                index = message.get("index")
                if not isinstance(index, int) or isinstance(index, bool):
                    raise TableError("BAD_SCHEMA", "toggle requires an integer index")
                self.engine.toggle_select(index)
            elif msg_type == "draw":
                self.engine.draw()
            elif msg_type == "showdown":
                result = self.engine.showdown()
                LOGGER.info("%s round finished: %s", self.label, result.outcome.value)
            elif msg_type == "reset":
                self.engine.reset()
            elif msg_type == "state":
                pass
            else:
                raise TableError("UNKNOWN_TYPE", f"Unsupported message type {msg_type!r}")
        except InvalidPhaseAction as exc:
            raise TableError("INVALID_PHASE", str(exc)) from exc
        except ValueError as exc:
            raise TableError("BAD_INDEX", str(exc)) from exc

        await self.send_state()


async def handle_connection(
    websocket: ServerConnection,
    config: GameConfig,
    policy_name: str = "random",
) -> None:
    # First frame must be a hello, same as the arena protocol.
    try:
        hello = json.loads(await websocket.recv())
    except ConnectionClosed:
        return
    except (TypeError, ValueError):
        hello = None
    if not isinstance(hello, dict) or hello.get("type") != "hello":
        await websocket.send(
            json.dumps({"v": PROTOCOL_VERSION, "type": "error", "code": "BAD_HELLO", "msg": "Expected hello"})
        )
        return

    name_raw = hello.get("name")
    label = name_raw.strip() if isinstance(name_raw, str) and name_raw.strip() else "REMOTE"

    rng = random.Random(config.seed)
    engine = GameEngine(config, rng=rng, discard_policy=POLICIES[policy_name])
    session = TableSession(websocket, engine, label=label)
    await session.send_json({"type": "welcome", "config": _config_payload(config, policy_name)})
    LOGGER.info("Player %s seated (computer=%s)", label, policy_name)

    try:
        await session.run()
    except ConnectionClosed:
        LOGGER.info("Player %s disconnected", label)
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Table session crashed for %s: %s", label, exc)


def _process_request(connection: ServerConnection, request: Request) -> Optional[Response]:
    """Answer plain HTTP health checks; let WebSocket upgrades through."""

    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None

    path = request.path.split("?", 1)[0]
    if path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "draw poker table running\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")


async def run_server(host: str, port: int, config: GameConfig, policy_name: str = "random") -> None:
    async def _handler(ws: ServerConnection) -> None:
        await handle_connection(ws, config, policy_name)

    async with serve(_handler, host, port, process_request=_process_request):
        LOGGER.info("Draw poker table listening on %s:%s (%s)", host, port, asdict(config))
        await asyncio.Future()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Five-card draw table: one human against the house")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=9876)
    parser.add_argument("--seed", type=int, default=None, help="Seed the dealer for reproducible rounds")
    parser.add_argument(
        "--computer",
        choices=sorted(POLICIES),
        default="random",
        help="Discard policy used by the house",
    )
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    config = GameConfig(seed=args.seed)
    asyncio.run(run_server(args.host, args.port, config, policy_name=args.computer))


if __name__ == "__main__":
    main()
