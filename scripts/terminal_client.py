#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from websockets.asyncio.client import ClientConnection, connect

logging.basicConfig(level=logging.INFO)

# TerminalClient renders table snapshots as text and turns keystrokes into
# protocol frames. It holds no game rules of its own.

COMMANDS = {
    "D": "deal",
    "R": "draw",
    "S": "showdown",
    "N": "reset",
}

ACTION_KEYS = {value: key for key, value in COMMANDS.items()}


def render_card(card: Optional[Dict[str, str]]) -> str:
    if card is None:
        return "[??]"
    return f"[{card['label']:>3}]"


class TerminalClient:
    def __init__(self, name: str, url: str) -> None:
        self.name = name
        self.url = url
        self.websocket: Optional[ClientConnection] = None
        self.state: Dict[str, Any] = {}

    async def run(self) -> None:
        async with connect(self.url) as ws:
            self.websocket = ws
            await self._send({"type": "hello", "v": 1, "name": self.name})
            await self._loop()

    async def _loop(self) -> None:
        assert self.websocket is not None
        while True:
            raw = await self.websocket.recv()
            msg = json.loads(raw)
            msg_type = msg.get("type")

            if msg_type == "welcome":
                print(f"Seated at draw poker table: {json.dumps(msg['config'])}")
                continue
            if msg_type == "error":
                print(f"!! {msg.get('code')}: {msg.get('msg')}")
            elif msg_type == "state":
                self.state = msg
                self._render_state(msg)

            frame = self._prompt()
            if frame is None:
                print("Leaving table.")
                break
            await self._send(frame)

    def _render_state(self, state: Dict[str, Any]) -> None:
        print(f"\n>>> {state['phase']}  round={state.get('round_id') or '-'}  deck={state['deck_remaining']}")
        computer = " ".join(render_card(card) for card in state["computer_hand"])
        print(f"Computer: {computer or '(no cards)'}")
        if state.get("computer_discards"):
            print(f"          computer drew {state['computer_discards']}")

        selection = set(state.get("selection", []))
        player_cards: List[str] = []
        for idx, card in enumerate(state["player_hand"]):
            marker = "*" if idx in selection else " "
            player_cards.append(f"{idx + 1}{marker}{render_card(card)}")
        print(f"You:      {' '.join(player_cards) or '(no cards)'}")

        result = state.get("result")
        if result:
            print(f"Ranks: you {result['player_rank_name']} vs computer {result['computer_rank_name']}")
        print(state["message"])

    def _prompt(self) -> Optional[Dict[str, Any]]:
        allowed = self.state.get("allowed", ["deal"])
        keys = [ACTION_KEYS[action] for action in allowed if action in ACTION_KEYS]
        if "toggle" in allowed:
            keys.insert(0, "1-5")
        prompt = "Action [" + "/".join(keys + ["Q"]) + "](h=help): "

        while True:
            choice = input(prompt).strip().upper()
            if choice == "H":
                self._print_help()
                continue
            if choice == "Q":
                return None
            if choice.isdigit():
                return {"type": "toggle", "v": 1, "index": int(choice) - 1}
            if choice in COMMANDS:
                return {"type": COMMANDS[choice], "v": 1}
            print("Unknown command. Try again.")

    def _print_help(self) -> None:
        print("1-5  mark/unmark a card for discard (up to 3)")
        print("D    deal a new round")
        print("R    replace marked cards")
        print("S    show both hands")
        print("N    abandon the round")
        print("Q    quit")

    async def _send(self, payload: Dict[str, Any]) -> None:
        assert self.websocket is not None
        await self.websocket.send(json.dumps(payload))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play five-card draw from the terminal")
    parser.add_argument("--url", default="ws://localhost:9876")
    parser.add_argument("--name", default="Player")
    args = parser.parse_args()

    client = TerminalClient(args.name, args.url)
    try:
        asyncio.run(client.run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
