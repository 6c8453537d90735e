"""Conversation transcript kept by the caller.

The proxy is stateless: every request carries the whole history, so the
transcript lives on the client side and is rebuilt into ``messages`` on
each send.
"""

from __future__ import annotations

from typing import Dict, List

from agent.schemas import ChatTurn


class Transcript:
    def __init__(self) -> None:
        self._turns: List[ChatTurn] = []

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> List[ChatTurn]:
        return list(self._turns)

    def add_user(self, content: str) -> None:
        self._turns.append(ChatTurn(role="user", content=content))

    def add_assistant(self, content: str) -> None:
        self._turns.append(ChatTurn(role="assistant", content=content))

    def as_messages(self) -> List[Dict[str, str]]:
        return [turn.model_dump() for turn in self._turns]

    def clear(self) -> None:
        self._turns.clear()
