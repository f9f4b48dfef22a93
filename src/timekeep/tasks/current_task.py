# src/timekeep/tasks/current_task.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..errors import NotFoundError, SerializationError, SlotIOError, ValidationError
from .task_models import OpenTask, decode_instant, encode_instant

logger = logging.getLogger(__name__)


class CurrentTaskSlot:
    """
    JSON file holding the one running task.

    File present = a task is running, file absent = idle.

    Writes go to a sibling temp file which is then os.replace()d over the
    target, so readers see either the old record or the new one.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- encoding ----

    @staticmethod
    def _encode(task: OpenTask) -> str:
        try:
            payload = {
                "project_name": task.project_name,
                "start_time": encode_instant(task.start_time),
                "description": task.description,
            }
            return json.dumps(payload, ensure_ascii=False, indent=2)
        except (TypeError, ValueError, ValidationError) as exc:
            raise SerializationError(f"cannot encode current task: {exc}") from exc

    def _decode(self, raw: str) -> OpenTask:
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SerializationError(f"malformed current task file {self._path}: {exc}") from exc

        if not isinstance(data, dict):
            raise SerializationError(f"current task file {self._path} is not a JSON object")

        project_name = data.get("project_name")
        description = data.get("description")
        if not isinstance(project_name, str):
            raise SerializationError(f"current task file {self._path}: project_name missing")
        if description is not None and not isinstance(description, str):
            raise SerializationError(f"current task file {self._path}: description is not a string")

        try:
            start_time = decode_instant(data.get("start_time"))
            return OpenTask(project_name, start_time, description)
        except (ValueError, ValidationError) as exc:
            raise SerializationError(f"current task file {self._path}: {exc}") from exc

    # ---- public API ----

    def exists(self) -> bool:
        try:
            return self._path.is_file()
        except OSError:
            return False

    def save(self, task: OpenTask) -> OpenTask:
        text = self._encode(task)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise SlotIOError(f"cannot write current task file {self._path}: {exc}") from exc

        logger.debug("Current task saved path=%s project=%s", self._path, task.project_name)
        return task

    def load(self) -> OpenTask:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError as exc:
            raise NotFoundError("no task is currently running") from exc
        except UnicodeDecodeError as exc:
            raise SerializationError(f"current task file {self._path} is not UTF-8") from exc
        except OSError as exc:
            raise SlotIOError(f"cannot read current task file {self._path}: {exc}") from exc
        return self._decode(raw)

    def clear(self) -> None:
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            raise SlotIOError(f"cannot remove current task file {self._path}: {exc}") from exc
        logger.debug("Current task cleared path=%s", self._path)
