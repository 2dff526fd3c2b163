from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..models.quiz import Quiz

logger = logging.getLogger(__name__)

_quiz_list = TypeAdapter(list[Quiz])


def _load_file(path: Path) -> list[Quiz]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("Failed to read quiz file %s: %s", path, exc)
        return []
    if isinstance(raw, dict):
        raw = [raw]
    try:
        return _quiz_list.validate_python(raw)
    except ValidationError as exc:
        logger.error("Invalid quiz file %s: %s", path, exc)
        return []


def load_quizzes(path: str | Path) -> list[Quiz]:
    """Load quizzes from a JSON file, or every ``*.json`` in a directory by filename order."""
    if not path:
        return []
    root = Path(path)
    if not root.exists():
        logger.warning("Quiz corpus not found: %s", root)
        return []
    if root.is_dir():
        quizzes: list[Quiz] = []
        for file in sorted(root.glob("*.json")):
            quizzes.extend(_load_file(file))
        return quizzes
    return _load_file(root)
