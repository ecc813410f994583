"""QuizService: the one object every call site talks to.

Built once by the application factory and kept on
``app.extensions['quizcraft']``. It owns the banks, the round lifecycle,
the arbiter, the reward selector and both background tasks, and reaches the
rest of the server only through the collaborators it is given.
"""

from __future__ import annotations

import logging
import random
import threading
import time
from typing import Callable, Protocol

from .arbiter import NO_MATCH, AnswerArbiter, MatchResult
from .banks import Question, QuestionBank, Reward, RewardBank
from .errors import NoQuestionsAvailable, NoRewardsAvailable, PersistenceFailure, UnknownRewardItem
from .lifecycle import ActiveQuestion, BroadcastPort, QuestionLifecycle, RoundState
from .rewards import RewardPick, RewardSelector
from .scheduler import RepeatingTask, TaskStarter
from .settings import QuizSettings
from .storage import QuizStore

logger = logging.getLogger(__name__)


class Inventory(Protocol):
    def grant(self, participant_id: int, item_id: str, quantity: int) -> bool: ...


class ItemResolver(Protocol):
    def resolve(self, item_id: str) -> str: ...


class QuizService:
    def __init__(
        self,
        *,
        base_settings: QuizSettings,
        store: QuizStore,
        broadcaster: BroadcastPort,
        inventory: Inventory,
        items: ItemResolver,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.time,
        start_task: TaskStarter | None = None,
        tick_rate: int = 20,
    ) -> None:
        self._base_settings = base_settings
        self.settings = base_settings
        self._store = store
        self._broadcaster = broadcaster
        self._inventory = inventory
        self._items = items
        self._rng = rng or random.Random()
        self._start_task = start_task
        self._tick_rate = tick_rate

        self.question_bank = QuestionBank()
        self.reward_bank = RewardBank()
        self.lifecycle = QuestionLifecycle(
            broadcaster,
            timeout_seconds=base_settings.question_timeout_seconds,
            question_message=base_settings.new_question_message,
            clock=clock,
        )
        self.arbiter = AnswerArbiter(self.lifecycle)
        self.selector = RewardSelector(self._rng)

        # Guards swapping the timer and watchdog; reload and start re-enter it
        self._timer_lock = threading.RLock()
        self._question_timer: RepeatingTask | None = None
        self._watchdog: RepeatingTask | None = None

    # --- Loading ---

    def load(self) -> None:
        self.settings = self._load_settings()
        self.lifecycle.configure(
            timeout_seconds=self.settings.question_timeout_seconds,
            question_message=self.settings.new_question_message,
        )
        self.question_bank.replace(self._store.load_questions())
        self.reward_bank.replace(self._store.load_rewards())
        logger.info(f"Loaded {len(self.question_bank)} questions and {len(self.reward_bank)} rewards")

    def _load_settings(self):
        try:
            return self._base_settings.with_overrides(self._store.load_settings_overrides())
        except PersistenceFailure as exc:
            logger.error(f"[settings-load-failed] {exc}; using configured defaults")
            return self._base_settings

    # --- Timers ---

    @property
    def question_timer(self) -> RepeatingTask | None:
        return self._question_timer

    @property
    def watchdog(self) -> RepeatingTask | None:
        return self._watchdog

    def start(self) -> None:
        """Start the auto-question timer (when enabled) and the timeout watchdog."""
        with self._timer_lock:
            self.start_auto_question_timer()
            if self._watchdog is None or self._watchdog.cancelled:
                step = 1.0 / self._tick_rate
                self._watchdog = RepeatingTask(
                    'quiz-watchdog', step, lambda: self.tick(step), start_task=self._start_task
                ).start()

    def shutdown(self) -> None:
        with self._timer_lock:
            self.stop_auto_question_timer()
            if self._watchdog is not None:
                self._watchdog.cancel()
                self._watchdog = None

    def start_auto_question_timer(self) -> None:
        with self._timer_lock:
            self.stop_auto_question_timer()
            if not self.settings.auto_question_enabled:
                logger.info("[timer-skip] auto questions disabled")
                return
            self._question_timer = RepeatingTask(
                'quiz-auto-question',
                self.settings.question_interval_seconds,
                self._on_question_timer,
                start_task=self._start_task,
            ).start()

    def stop_auto_question_timer(self) -> None:
        with self._timer_lock:
            if self._question_timer is not None:
                self._question_timer.cancel()
                self._question_timer = None

    def _on_question_timer(self):
        try:
            self.ask_random_question()
        except NoQuestionsAvailable:
            return

    # --- Rounds ---

    def ask_random_question(self) -> ActiveQuestion:
        question = self.question_bank.pick(self._rng)
        if question is None:
            logger.warning("No questions available")
            raise NoQuestionsAvailable("No questions available")
        return self.ask_question(question)

    def ask_question(self, question: Question) -> ActiveQuestion:
        return self.lifecycle.start_round(question)

    def get_active(self) -> ActiveQuestion | None:
        return self.lifecycle.get_active()

    def tick(self, delta_seconds: float) -> bool:
        return self.lifecycle.tick(delta_seconds)

    def check_timeout(self) -> bool:
        return self.lifecycle.check_timeout()

    def handle_answer(self, participant_id: int, display_name: str, message: str) -> MatchResult:
        """Judge a chat line; the winner is rewarded before this returns."""
        if not message:
            return NO_MATCH
        result = self.arbiter.submit(participant_id, message)
        if result.correct:
            self.reward_winner(participant_id, display_name)
        return result

    def reward_winner(self, participant_id: int, display_name: str) -> RewardPick | None:
        """Grant a random reward and announce it. Returns None when nothing was granted."""
        try:
            pick = self.selector.select(self.reward_bank.snapshot())
            item_id = self._items.resolve(pick.reward.item_id)
        except NoRewardsAvailable:
            logger.warning("No rewards available")
            return None
        except UnknownRewardItem as exc:
            logger.error(f"Invalid reward item: {exc.item_id}")
            return None

        if not self._inventory.grant(participant_id, item_id, pick.quantity):
            return None
        self._broadcaster.send(self.settings.render_reward(display_name, pick.describe()))
        logger.info(f"Player {display_name} received reward: {pick.describe()}")
        return pick

    # --- Commands ---

    def reload(self) -> str:
        """Reload settings and banks, restart the timer and drop any open round."""
        with self._timer_lock:
            self.load()
            self.stop_auto_question_timer()
            self.start_auto_question_timer()
            self.lifecycle.close_round(RoundState.IDLE)
        logger.info("[reload] quiz configuration reloaded")
        return self.settings.config_reloaded_message

    def add_question(self, text: str, answer: str) -> Question:
        question = Question(text=text, answer=answer)
        questions = self.question_bank.append(question)
        try:
            self._store.save_questions(questions)
        except PersistenceFailure as exc:
            logger.error(f"Failed to save questions: {exc}")
        return question

    def add_reward(self, item_id: str, max_amount: int) -> Reward:
        reward = Reward(item_id=item_id, max_amount=max_amount)
        rewards = self.reward_bank.append(reward)
        try:
            self._store.save_rewards(rewards)
        except PersistenceFailure as exc:
            logger.error(f"Failed to save rewards: {exc}")
        return reward

    @property
    def questions(self) -> tuple[Question, ...]:
        return self.question_bank.snapshot()

    @property
    def rewards(self) -> tuple[Reward, ...]:
        return self.reward_bank.snapshot()
