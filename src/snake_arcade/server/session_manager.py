"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from collections import deque
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_arcade.config import GameConfig, ScoreRules
from snake_arcade.engine import GameController, StepResult
from snake_arcade.headless import MonotonicClock
from snake_arcade.interfaces import Clock, Intent
from snake_arcade.server.models import SessionStatus, SessionSummary
from snake_arcade.session import Phase

logger = logging.getLogger(__name__)

# All durations are in clock milliseconds.
_CREATION_LIMIT = 10
_CREATION_WINDOW_MS = 60_000
_QUOTA_SWEEP_MS = 60_000
_IDLE_TIMEOUT_MS = 60_000
_MAX_FINISHED_SESSIONS = 100


class CreationQuota:
    """Sliding-window count of sessions created per client address."""

    def __init__(
        self,
        limit: int = _CREATION_LIMIT,
        window_ms: int = _CREATION_WINDOW_MS,
        sweep_every_ms: int = _QUOTA_SWEEP_MS,
    ) -> None:
        self.limit = limit
        self.window_ms = window_ms
        self.sweep_every_ms = sweep_every_ms
        self._stamps: dict[str, deque[int]] = {}
        self._last_sweep = 0

    @property
    def tracked_clients(self) -> int:
        return len(self._stamps)

    def allows(self, client: str, now: int) -> bool:
        """True if *client* may create another session at *now*."""
        self._sweep(now)
        stamps = self._stamps.get(client)
        if not stamps:
            return True
        while stamps and now - stamps[0] >= self.window_ms:
            stamps.popleft()
        return len(stamps) < self.limit

    def record(self, client: str, now: int) -> None:
        self._stamps.setdefault(client, deque()).append(now)

    def _sweep(self, now: int) -> None:
        """Forget clients whose newest creation has left the window."""
        if now - self._last_sweep < self.sweep_every_ms:
            return
        self._last_sweep = now
        stale = [
            client for client, stamps in self._stamps.items()
            if not stamps or now - stamps[-1] >= self.window_ms
        ]
        for client in stale:
            del self._stamps[client]
        if stale:
            logger.debug("Forgot %d idle clients from the quota.", len(stale))

    def clear(self) -> None:
        self._stamps.clear()


@dataclass
class SessionInstance:
    """All state for a single hosted game.

    ``idle_since`` is set while the game sits in game over with no player
    connected, and cleared as soon as either stops being true.
    """

    session_id: str
    controller: GameController
    token: str
    created_at: int
    status: SessionStatus = SessionStatus.ACTIVE
    pending_intent: Intent = Intent.NONE
    websocket: WebSocket | None = None
    connected: bool = False
    spectators: list[WebSocket] = field(default_factory=list)
    idle_since: int | None = None
    finished_at: int | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        session = self.controller.session
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            phase=session.phase.value,
            score=session.score,
            speed=session.speed,
        )

    def queue_intent(self, intent: Intent) -> None:
        """Buffer an intent for the next tick.

        Restart and quit always win; of several steering intents between two
        ticks only the first is kept.
        """
        if intent in (Intent.RESTART, Intent.QUIT):
            self.pending_intent = intent
        elif self.pending_intent == Intent.NONE:
            self.pending_intent = intent

    def audience(self) -> list[WebSocket]:
        """The player socket (if any) followed by the spectators."""
        sockets = list(self.spectators)
        if self.websocket is not None:
            sockets.insert(0, self.websocket)
        return sockets

    def detach(self, ws: WebSocket) -> None:
        """Forget *ws*, whether it is the player or a spectator."""
        if ws is self.websocket:
            self.websocket = None
            self.connected = False
        elif ws in self.spectators:
            self.spectators.remove(ws)


def state_payload(instance: SessionInstance, result: StepResult | None) -> str:
    state = instance.controller.snapshot()
    state["session_id"] = instance.session_id
    state["events"] = (
        [e.value for e in result.events] if result is not None else []
    )
    return json.dumps(state, separators=(",", ":"))


class SessionManager:
    """Central registry managing all hosted sessions.

    Sessions end when the player quits, or when they have been left in game
    over with nobody connected for ``idle_timeout_ms``. Only the most recent
    ``max_finished_sessions`` finished sessions stay queryable.
    """

    def __init__(
        self,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
        idle_timeout_ms: int = _IDLE_TIMEOUT_MS,
        clock: Clock | None = None,
        quota: CreationQuota | None = None,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        if idle_timeout_ms < 0:
            raise ValueError("idle_timeout_ms must be >= 0.")
        self._sessions: dict[str, SessionInstance] = {}
        self._max_finished_sessions = max_finished_sessions
        self.idle_timeout_ms = idle_timeout_ms
        self.clock = clock if clock is not None else MonotonicClock()
        self.quota = quota if quota is not None else CreationQuota()

    def create_session(
        self,
        grid_width: int | None = None,
        grid_height: int | None = None,
        initial_speed: int = 200,
        scoring: str = "standard",
        poison_enabled: bool = True,
        seed: int | None = None,
        client_ip: str = "unknown",
    ) -> SessionInstance:
        """Create a new session and return the instance (not yet ticking)."""
        now = self.clock.now()
        if not self.quota.allows(client_ip, now):
            raise ValueError("Rate limit exceeded. Try again later.")

        defaults = GameConfig()
        block = defaults.block_size
        config = GameConfig(
            screen_width=(grid_width or defaults.grid_width) * block,
            screen_height=(grid_height or defaults.grid_height) * block,
            initial_speed=initial_speed,
            min_speed=min(defaults.min_speed, initial_speed),
            poison_enabled=poison_enabled,
            scoring=ScoreRules.classic() if scoring == "classic" else ScoreRules(),
        )
        controller = GameController(config, seed=seed)

        session_id = uuid.uuid4().hex[:12]
        instance = SessionInstance(
            session_id=session_id,
            controller=controller,
            token=uuid.uuid4().hex,
            created_at=now,
        )
        self._sessions[session_id] = instance
        self.quota.record(client_ip, now)
        logger.info(
            "Session %s created (%dx%d).",
            session_id, controller.grid.width, controller.grid.height,
        )
        return instance

    def start_session(self, instance: SessionInstance) -> None:
        """Launch the tick loop for *instance* on the running event loop."""
        if instance._task is not None:
            raise ValueError("Session is already running.")
        instance._task = asyncio.create_task(self._tick_loop(instance))

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of non-finished sessions."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != SessionStatus.FINISHED
        ]

    def _authorize(self, session_id: str, token: str) -> SessionInstance:
        instance = self._sessions.get(session_id)
        if instance is None:
            raise KeyError(f"Session {session_id} not found.")
        if token != instance.token:
            raise PermissionError("Invalid session token.")
        return instance

    def restart_session(self, session_id: str, token: str) -> SessionInstance:
        """Restart a session that is in game over."""
        instance = self._authorize(session_id, token)
        if instance.status != SessionStatus.ACTIVE:
            raise ValueError("Session has finished.")
        if instance.controller.phase != Phase.GAME_OVER:
            raise ValueError("Session can only be restarted after game over.")
        instance.controller.restart()
        instance.idle_since = None
        return instance

    def quit_session(self, session_id: str, token: str) -> SessionInstance:
        """End a session on behalf of its player."""
        instance = self._authorize(session_id, token)
        now = self.clock.now()
        instance.controller.step(now, Intent.QUIT)
        self._finish(instance, now)
        logger.info("Session %s quit by player.", session_id)
        return instance

    def reap_if_idle(self, instance: SessionInstance, now: int) -> bool:
        """Finish *instance* if it was abandoned in game over.

        Returns True if the session was finished by this call.
        """
        if (
            instance.controller.phase != Phase.GAME_OVER
            or instance.connected
        ):
            instance.idle_since = None
            return False
        if instance.idle_since is None:
            instance.idle_since = now
            return False
        if now - instance.idle_since < self.idle_timeout_ms:
            return False
        logger.info(
            "Session %s abandoned in game over for %d ms; finishing.",
            instance.session_id, now - instance.idle_since,
        )
        self._finish(instance, now)
        return True

    def _finish(self, instance: SessionInstance, now: int) -> None:
        """Mark *instance* finished once and bound the finished backlog."""
        if instance.status == SessionStatus.FINISHED:
            return
        instance.status = SessionStatus.FINISHED
        instance.finished_at = now

        finished = sorted(
            (s for s in self._sessions.values()
             if s.status == SessionStatus.FINISHED),
            key=lambda s: s.finished_at,
            reverse=True,
        )
        for stale in finished[self._max_finished_sessions:]:
            del self._sessions[stale.session_id]
            logger.debug("Dropped finished session %s.", stale.session_id)

    async def _tick_loop(self, instance: SessionInstance) -> None:
        """Step the session at its own pace, broadcasting state each tick."""
        controller = instance.controller
        try:
            while instance.status == SessionStatus.ACTIVE:
                await asyncio.sleep(controller.frame_interval_ms() / 1000.0)
                async with instance.lock:
                    if instance.status != SessionStatus.ACTIVE:
                        break
                    now = self.clock.now()
                    intent = instance.pending_intent
                    instance.pending_intent = Intent.NONE
                    result = controller.step(now, intent)
                    if controller.quit_requested:
                        self._finish(instance, now)
                    else:
                        self.reap_if_idle(instance, now)
                    payload = state_payload(instance, result)
                await self._broadcast(instance, payload)
        except asyncio.CancelledError:
            logger.info(
                "Tick loop cancelled for session %s.", instance.session_id,
            )
        except Exception:
            logger.exception(
                "Tick loop error in session %s.", instance.session_id,
            )
            self._finish(instance, self.clock.now())
        finally:
            if instance.status == SessionStatus.FINISHED:
                await self._hang_up(instance)

    async def _broadcast(self, instance: SessionInstance, payload: str) -> None:
        """Send *payload* to everyone watching; forget sockets that fail."""
        for ws in instance.audience():
            if ws.client_state != WebSocketState.CONNECTED:
                instance.detach(ws)
                continue
            try:
                await ws.send_text(payload)
            except Exception:
                logger.debug(
                    "Dropping unreachable socket in session %s.",
                    instance.session_id,
                )
                instance.detach(ws)

    async def _hang_up(self, instance: SessionInstance) -> None:
        """Close every socket still attached to a finished session."""
        for ws in instance.audience():
            instance.detach(ws)
            if ws.client_state != WebSocketState.CONNECTED:
                continue
            try:
                await ws.close(code=1000, reason="Session finished.")
            except Exception:
                logger.warning(
                    "Failed closing a socket in session %s.",
                    instance.session_id,
                )

    async def cleanup(self) -> None:
        """Cancel all running tick loops and forget quota state."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task is not None and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self.quota.clear()
        logger.info("SessionManager cleanup complete.")
