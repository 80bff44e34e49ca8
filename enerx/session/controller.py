"""
Dashboard controller — the single owner of ``DashboardState``.

The controller is the intent surface the presentation layer calls:

    controller.login()
    controller.select_tab("recommendations")
    controller.logout()

Each intent applies a pure transition from ``enerx.session.transitions``
synchronously. When a transition allocates a generation request, the
controller schedules ``generator.generate()`` as an asyncio task on the
running loop. On completion the result goes through the same guard as every
other transition; a result whose request token no longer matches is dropped.

Superseded and logged-out tasks are also cancelled, but only to free the
work early. Correctness rests on the completion guard: a task that finished
in the same loop iteration as a logout is still ignored.

Intents never raise. An unknown tab is logged and ignored; a missing event
loop or a failing generator becomes ``failed(reason)``.

Observers registered with ``subscribe()`` receive a fresh
``DashboardSnapshot`` after every state change.

Usage::

    controller = DashboardController(ScriptedRecommendationGenerator())
    controller.login()
    controller.select_tab(DashboardTab.RECOMMENDATIONS)
    snapshot = await controller.wait_for_pending()
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Optional, Union

from enerx.errors import GenerationFailure
from enerx.models.recommendation import RecommendationBatch
from enerx.models.session import DashboardSnapshot, DashboardState
from enerx.models.telemetry import TelemetryBundle
from enerx.recommendations.generator import (
    RecommendationGenerator,
    ScriptedRecommendationGenerator,
)
from enerx.session import transitions
from enerx.taxonomy.dashboard_taxonomy import DashboardTab
from enerx.telemetry.loader import demo_telemetry, resolve_telemetry
from enerx.utils.time_utils import utcnow

if TYPE_CHECKING:
    from enerx.config import AppConfig

logger = logging.getLogger(__name__)

StateListener = Callable[[DashboardSnapshot], None]


class DashboardController:
    """Owns dashboard state and drives recommendation generation.

    Attributes:
        generator: Source of recommendation batches.
        telemetry: Read-only telemetry bundle exposed in every snapshot.
    """

    def __init__(
        self,
        generator: Optional[RecommendationGenerator] = None,
        telemetry: Optional[TelemetryBundle] = None,
    ) -> None:
        self.generator = generator or ScriptedRecommendationGenerator()
        self.telemetry = telemetry or demo_telemetry()
        self._state: DashboardState = transitions.initial_state()
        self._task: Optional[asyncio.Task] = None
        self._listeners: list[StateListener] = []

    @classmethod
    def from_config(cls, config: "AppConfig") -> "DashboardController":
        """Build a controller from ``AppConfig`` generator and telemetry settings.

        Raises:
            TelemetryLoadError: If a configured telemetry file cannot be loaded.
        """
        return cls(
            generator=ScriptedRecommendationGenerator(
                latency_seconds=config.generator.latency_seconds
            ),
            telemetry=resolve_telemetry(config.telemetry.seed_file),
        )

    # ── Read side ─────────────────────────────────────────────────────────────

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def has_pending(self) -> bool:
        """``True`` while a generation task is scheduled or running."""
        return self._task is not None and not self._task.done()

    def snapshot(self) -> DashboardSnapshot:
        """Return the read-only view the presentation layer renders."""
        return DashboardSnapshot(
            session=self._state.session,
            stats=self.telemetry.stats,
            generation=self.telemetry.generation,
            savings=self.telemetry.savings,
            recommendations=self._state.recommendations,
        )

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ── Intents ───────────────────────────────────────────────────────────────

    def login(self) -> None:
        self._apply(transitions.login(self._state), "login")

    def logout(self) -> None:
        self._cancel_pending()
        self._apply(transitions.logout(self._state), "logout")

    def select_tab(self, tab: Union[DashboardTab, str]) -> None:
        """Switch tabs; entering ``recommendations`` may start a generation."""
        try:
            target = DashboardTab(tab)
        except ValueError:
            logger.warning(
                "Ignoring select_tab with unknown tab '%s'. Valid tabs: %s",
                tab, [t.value for t in DashboardTab],
            )
            return
        self._apply(transitions.select_tab(self._state, target), f"select_tab({target.value})")

    async def wait_for_pending(self) -> DashboardSnapshot:
        """Wait until no generation is in flight, then return a snapshot.

        Follows a request that supersedes the one being waited on.
        """
        while self._task is not None:
            task = self._task
            await asyncio.wait({task})
            if self._task is task:
                self._task = None
        return self.snapshot()

    # ── Internals ─────────────────────────────────────────────────────────────

    def _apply(self, transition: transitions.Transition, intent: str) -> None:
        previous = self._state
        self._state = transition.state

        if transition.start_request is not None:
            self._start_generation(transition.start_request)

        if self._state is not previous:
            fields = {
                "intent": intent,
                "logged_in": self._state.is_logged_in,
                "tab": self._state.active_tab.value,
                "recommendations": self._state.recommendations.status.value,
                "request_seq": self._state.request_seq,
            }
            logger.info(
                "Dashboard transition [%s] | logged_in=%s tab=%s recommendations=%s request_seq=%d",
                *fields.values(),
                extra=fields,
            )
            self._notify()

    def _start_generation(self, request_id: int) -> None:
        self._cancel_pending()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(
                "Cannot start recommendation generation without a running event loop | request_id=%d",
                request_id,
            )
            self._state = transitions.fail_generation(
                self._state, request_id, "Recommendation engine unavailable: no running event loop."
            ).state
            return

        logger.debug(
            "Starting recommendation generation | request_id=%d generator=%s",
            request_id, self.generator.name,
        )
        self._task = loop.create_task(
            self._run_generation(request_id),
            name=f"enerx-recommendations-{request_id}",
        )

    async def _run_generation(self, request_id: int) -> None:
        batch: Optional[RecommendationBatch] = None
        reason = ""
        try:
            try:
                recs = await self.generator.generate()
                batch = RecommendationBatch(
                    request_id=request_id,
                    recommendations=tuple(recs),
                    generated_at=utcnow(),
                )
            except GenerationFailure as exc:
                logger.warning(
                    "Recommendation generation failed | request_id=%d reason=%s",
                    request_id, exc.reason,
                )
                reason = exc.reason
            except Exception as exc:
                logger.error(
                    "Recommendation generation FAILED: %s | request_id=%d",
                    exc, request_id,
                )
                reason = str(exc).strip() or type(exc).__name__

            if batch is None:
                self._apply(
                    transitions.fail_generation(self._state, request_id, reason),
                    "generation_failed",
                )
            else:
                self._apply(
                    transitions.complete_generation(self._state, request_id, batch),
                    "generation_complete",
                )
        finally:
            if self._task is asyncio.current_task():
                self._task = None

    def _cancel_pending(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            logger.debug("Cancelling in-flight recommendation generation (%s).", task.get_name())
            task.cancel()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception as exc:
                logger.error("Dashboard state listener %r failed: %s", listener, exc)
