"""Runtime quiz settings: Flask config defaults plus the reloadable overlay file."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from .errors import PersistenceFailure


@dataclass(frozen=True, slots=True)
class QuizSettings:
    auto_question_enabled: bool = True
    question_interval_seconds: int = 300
    question_timeout_seconds: int = 60
    new_question_message: str = "%question%"
    reward_message: str = "%player%: %reward%"
    config_reloaded_message: str = "Configuration reloaded"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "QuizSettings":
        defaults = cls()
        return cls(
            auto_question_enabled=bool(config.get('AUTO_QUESTION_ENABLED', defaults.auto_question_enabled)),
            question_interval_seconds=int(config.get('QUESTION_INTERVAL_SEC', defaults.question_interval_seconds)),
            question_timeout_seconds=int(config.get('QUESTION_TIMEOUT_SEC', defaults.question_timeout_seconds)),
            new_question_message=config.get('NEW_QUESTION_MESSAGE', defaults.new_question_message),
            reward_message=config.get('REWARD_MESSAGE', defaults.reward_message),
            config_reloaded_message=config.get('CONFIG_RELOADED_MESSAGE', defaults.config_reloaded_message),
        ).validated()

    def with_overrides(self, overrides: Mapping[str, Any]) -> "QuizSettings":
        """Apply the overlay file's keys. Unknown keys or bad types raise PersistenceFailure."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - set(known)
        if unknown:
            raise PersistenceFailure(f"Unknown settings: {', '.join(sorted(unknown))}")
        changes: dict[str, Any] = {}
        for key, value in overrides.items():
            current = getattr(self, key)
            # bool is an int subclass; keep the flag and the numbers apart
            if isinstance(current, bool) or isinstance(value, bool):
                if not (isinstance(current, bool) and isinstance(value, bool)):
                    raise PersistenceFailure(f"Setting {key!r} has the wrong type")
            elif not isinstance(value, type(current)):
                raise PersistenceFailure(f"Setting {key!r} has the wrong type")
            changes[key] = value
        try:
            return replace(self, **changes).validated()
        except ValueError as exc:
            raise PersistenceFailure(str(exc)) from exc

    def validated(self) -> "QuizSettings":
        if self.question_interval_seconds < 1:
            raise ValueError("question_interval_seconds must be at least 1")
        if self.question_timeout_seconds < 1:
            raise ValueError("question_timeout_seconds must be at least 1")
        return self

    def render_reward(self, player: str, reward: str) -> str:
        return self.reward_message.replace('%player%', player).replace('%reward%', reward)
