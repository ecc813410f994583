"""JSON persistence for the question and reward banks.

Missing or unreadable files fall back to a small default set. A missing file
is created from the defaults; an unreadable one is left alone for the
operator to fix. Save failures are reported as
:class:`PersistenceFailure` and never abort a round.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

from .banks import Question, Reward
from .errors import PersistenceFailure

logger = logging.getLogger(__name__)

QUESTIONS_FILE = "questions.json"
REWARDS_FILE = "rewards.json"
SETTINGS_FILE = "quizcraft.json"


def default_questions() -> list[Question]:
    return [
        Question("Minecraft中哪种生物会爆炸？", "苦力怕"),
        Question("用来合成火把的两种材料是什么？", "煤炭和木棍"),
    ]


def default_rewards() -> list[Reward]:
    return [
        Reward("minecraft:diamond", 3),
        Reward("minecraft:emerald", 5),
        Reward("minecraft:iron_ingot", 10),
    ]


class QuizStore:
    """Reads and writes the JSON files under one data directory."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self.questions_path = self.data_dir / QUESTIONS_FILE
        self.rewards_path = self.data_dir / REWARDS_FILE
        self.settings_path = self.data_dir / SETTINGS_FILE

    # --- Questions ---

    def load_questions(self) -> list[Question]:
        return self._load_or_default(
            self.questions_path, Question.from_dict, default_questions, self.save_questions, "questions"
        )

    def save_questions(self, questions: Sequence[Question]) -> None:
        self._write(self.questions_path, [q.to_dict() for q in questions])

    # --- Rewards ---

    def load_rewards(self) -> list[Reward]:
        return self._load_or_default(
            self.rewards_path, Reward.from_dict, default_rewards, self.save_rewards, "rewards"
        )

    def save_rewards(self, rewards: Sequence[Reward]) -> None:
        self._write(self.rewards_path, [r.to_dict() for r in rewards])

    # --- Settings overlay ---

    def load_settings_overrides(self) -> dict[str, Any]:
        """Return the runtime settings overlay, or ``{}`` when there is none."""
        if not self.settings_path.exists():
            return {}
        data = self._read(self.settings_path)
        if not isinstance(data, dict):
            raise PersistenceFailure(f"{self.settings_path} must contain a JSON object")
        return data

    # --- Helpers ---

    def _load_or_default(self, path, parse, defaults, save, label):
        if path.exists():
            try:
                return self._parse_list(path, parse)
            except PersistenceFailure as exc:
                # Leave the file for the operator to fix
                logger.error(f"[store-load-failed] {label}: {exc}; using defaults")
                return defaults()
        logger.info(f"[store-missing] {path} not found; writing default {label}")
        items = defaults()
        try:
            save(items)
        except PersistenceFailure as exc:
            logger.error(f"[store-save-failed] {label}: {exc}")
        return items

    def _parse_list(self, path, parse):
        data = self._read(path)
        if not isinstance(data, list):
            raise PersistenceFailure(f"{path} must contain a JSON array")
        try:
            return [parse(entry) for entry in data]
        except (KeyError, TypeError, ValueError) as exc:
            raise PersistenceFailure(f"{path} has an invalid entry: {exc}") from exc

    @staticmethod
    def _read(path):
        try:
            with path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"Failed to read {path}: {exc}") from exc

    def _write(self, path, payload):
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
        except OSError as exc:
            raise PersistenceFailure(f"Failed to write {path}: {exc}") from exc
