# src/timekeep/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..tasks.lifecycle import TaskLifecycle
from .ports import Clock


@dataclass
class AppState:
    # Settings are kept on the state so command handlers can report paths.
    settings: Settings
    clock: Clock
    lifecycle: TaskLifecycle
