"""Completion tracking for text/voicemail tasks and persisted host state."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


class CompletionTracker:
    """Done / not-done flags keyed by task identity key.

    Keys are opaque: a task keeps its flag across re-derivation as long as
    its identity key is unchanged.
    """

    def __init__(self, done_keys: Iterable[str] = ()):
        self._state: dict[str, bool] = {key: True for key in done_keys}

    def is_done(self, key: str) -> bool:
        return self._state.get(key, False)

    def set_done(self, key: str, done: bool = True) -> None:
        if done:
            self._state[key] = True
        else:
            self._state.pop(key, None)

    def toggle(self, key: str) -> bool:
        """Flip the flag for ``key`` and return the new value."""

        done = not self.is_done(key)
        self.set_done(key, done)
        return done

    def done_keys(self) -> list[str]:
        return sorted(key for key, done in self._state.items() if done)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.is_done(key)

    def __len__(self) -> int:
        return len(self.done_keys())


@dataclass
class HostState:
    """State the host keeps between sessions."""

    done_keys: list[str] = field(default_factory=list)
    sheet_url: str = ""

    def tracker(self) -> CompletionTracker:
        return CompletionTracker(self.done_keys)


def load_state(file_path: str) -> HostState:
    """Load host state from JSON; a missing file gives an empty state."""

    path = Path(file_path)
    if not path.exists():
        return HostState()

    with open(path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, dict):
        raise ValueError("State file must contain a JSON object")

    done_keys = payload.get("done_keys", [])
    if not isinstance(done_keys, list) or not all(isinstance(key, str) for key in done_keys):
        raise ValueError("State field 'done_keys' must be a list of strings")

    sheet_url = payload.get("sheet_url") or ""
    return HostState(done_keys=list(done_keys), sheet_url=str(sheet_url))


def save_state(file_path: str, state: HostState) -> None:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"done_keys": sorted(set(state.done_keys)), "sheet_url": state.sheet_url}
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.debug("Saved %d completed task key(s) to %s", len(payload["done_keys"]), path)
