"""Realtime Axiom token-launch feed over a single shared WebSocket.

One connection serves every subscriber. The connection is started by the
first ``subscribe`` (when credentials are present), torn down when the last
subscriber leaves, and re-established after a fixed delay whenever it closes
while subscribers remain.

State machine:
    DISCONNECTED -> CONNECTING -> OPEN -> DISCONNECTED

While a reconnect delay is pending the state is DISCONNECTED but the
connection task still exists, so new subscribers join it instead of opening a
second socket.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from collections.abc import Callable
from enum import Enum
from typing import Any

import structlog
from websockets.asyncio.client import connect as ws_connect
from websockets.exceptions import ConnectionClosed

from axiomtrack.config.settings import Settings, get_settings
from axiomtrack.constants.axiom import (
    NEW_TOKEN_MESSAGE_TYPE,
    NEW_TOKENS_CHANNEL,
    SUBSCRIBE_MESSAGE_TYPE,
)
from axiomtrack.core.exceptions import MalformedPayloadError
from axiomtrack.models.token import LaunchEvent
from axiomtrack.services.axiom.credentials import CredentialStore
from axiomtrack.services.axiom.normalize import STREAM_LAUNCH_FIELDS, normalize

log = structlog.get_logger(__name__)

LaunchListener = Callable[[LaunchEvent], None]
ConnectFn = Callable[..., Any]


class FeedState(str, Enum):
    """Connection states of the launch feed."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"


class SubscriberRegistry:
    """Ordered list of launch listeners with isolated delivery.

    Duplicates are allowed; ``remove`` drops every entry equal to the
    callback.
    """

    def __init__(self) -> None:
        self._listeners: list[LaunchListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def add(self, listener: LaunchListener) -> None:
        self._listeners.append(listener)

    def remove(self, listener: LaunchListener) -> int:
        """Remove all registrations of ``listener``; return how many."""
        before = len(self._listeners)
        self._listeners = [existing for existing in self._listeners if existing != listener]
        return before - len(self._listeners)

    def clear(self) -> None:
        self._listeners = []

    def dispatch(self, event: LaunchEvent) -> int:
        """Call every listener in registration order with the same event.

        A listener that raises is logged and skipped; the rest still run.

        Returns:
            Number of listeners that returned normally.
        """
        delivered = 0
        for listener in list(self._listeners):
            try:
                listener(event)
                delivered += 1
            except Exception as e:
                log.exception(
                    "launch_listener_failed",
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    mint=event.mint,
                    error=str(e),
                )
        return delivered


class LaunchFeed:
    """Shared push-channel connection fanning out new-token launches.

    Must be used from within a running event loop.

    Example:
        feed = LaunchFeed(credentials)
        feed.subscribe(on_launch)
        ...
        feed.unsubscribe(on_launch)  # closes the socket when nobody is left
    """

    def __init__(
        self,
        credentials: CredentialStore,
        settings: Settings | None = None,
        connect: ConnectFn = ws_connect,
    ) -> None:
        """Initialize the feed.

        Args:
            credentials: Shared session credentials (bearer token source).
            settings: URL and reconnect policy.
            connect: WebSocket connect function returning an async context
                manager (``websockets.asyncio.client.connect`` by default).
        """
        settings = settings or get_settings()
        self._credentials = credentials
        self._url = settings.axiom_ws_url
        self._reconnect_delay = settings.ws_reconnect_delay_seconds
        self._max_reconnect_attempts = settings.ws_max_reconnect_attempts
        self._connect = connect
        self._subscribers = SubscriberRegistry()
        self._task: asyncio.Task[None] | None = None
        self._websocket: Any = None
        self._state = FeedState.DISCONNECTED
        self.connection_attempts = 0

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def is_running(self) -> bool:
        """True while a connection task exists (open, connecting or waiting to reconnect)."""
        return self._task is not None

    def subscribe(self, listener: LaunchListener) -> None:
        """Register a listener and start the shared connection if needed."""
        self._subscribers.add(listener)
        log.debug("launch_feed_subscribed", subscribers=len(self._subscribers))

        if self._task is not None:
            return
        if not self._credentials.has_credentials():
            log.info("launch_feed_idle", reason="credentials_missing")
            return
        self._start()

    def unsubscribe(self, listener: LaunchListener) -> None:
        """Remove a listener; close the connection when none remain."""
        removed = self._subscribers.remove(listener)
        log.debug(
            "launch_feed_unsubscribed", removed=removed, subscribers=len(self._subscribers)
        )
        if len(self._subscribers) == 0 and self._task is not None:
            task, self._task = self._task, None
            self._websocket = None
            self._state = FeedState.DISCONNECTED
            task.cancel()
            log.info("launch_feed_closed", reason="no_subscribers")

    async def close(self) -> None:
        """Drop all listeners and wait for the connection task to finish."""
        self._subscribers.clear()
        task, self._task = self._task, None
        self._websocket = None
        self._state = FeedState.DISCONNECTED
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
            log.info("launch_feed_closed", reason="shutdown")

    def _start(self) -> None:
        self._state = FeedState.CONNECTING
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="axiom-launch-feed"
        )

    def _owns(self, task: asyncio.Task[Any] | None) -> bool:
        return task is not None and self._task is task

    async def _run(self) -> None:
        """Connect, then reconnect at a constant cadence while listeners remain."""
        me = asyncio.current_task()
        attempts = 0
        try:
            while True:
                if await self._connect_once(me):
                    attempts = 0

                if len(self._subscribers) == 0:
                    break
                if not self._credentials.has_credentials():
                    log.info("launch_feed_idle", reason="credentials_missing")
                    break
                if (
                    self._max_reconnect_attempts is not None
                    and attempts >= self._max_reconnect_attempts
                ):
                    log.error(
                        "launch_feed_reconnect_limit_reached",
                        attempts=attempts,
                        subscribers=len(self._subscribers),
                    )
                    break

                attempts += 1
                log.info(
                    "launch_feed_reconnect_scheduled",
                    delay_seconds=self._reconnect_delay,
                    attempt=attempts,
                )
                await asyncio.sleep(self._reconnect_delay)
        finally:
            if self._owns(me):
                self._task = None
                self._websocket = None
                self._state = FeedState.DISCONNECTED

    async def _connect_once(self, me: asyncio.Task[Any] | None) -> bool:
        """Run one connection until it closes.

        Returns:
            True if the socket reached the open state.
        """
        token = self._credentials.access_token
        if not token:
            return False

        self._state = FeedState.CONNECTING
        self.connection_attempts += 1
        opened = False
        websocket: Any = None
        try:
            async with self._connect(
                self._url,
                additional_headers={"Authorization": f"Bearer {token}"},
            ) as websocket:
                if self._owns(me):
                    self._websocket = websocket
                    self._state = FeedState.OPEN
                opened = True
                log.info("launch_feed_connected", url=self._url)

                await websocket.send(
                    json.dumps({"type": SUBSCRIBE_MESSAGE_TYPE, "channel": NEW_TOKENS_CHANNEL})
                )
                async for raw in websocket:
                    self._handle_message(raw)

            log.info("launch_feed_disconnected")
        except ConnectionClosed as e:
            log.warning("launch_feed_connection_lost", error=str(e))
        except Exception as e:
            log.error("launch_feed_connection_error", error=str(e), url=self._url)
        finally:
            if self._owns(me):
                if self._websocket is websocket:
                    self._websocket = None
                self._state = FeedState.DISCONNECTED
        return opened

    def _handle_message(self, raw: str | bytes) -> None:
        """Decode one inbound frame and fan out new-token launches."""
        try:
            message = json.loads(raw)
        except (TypeError, ValueError) as e:
            log.warning("launch_feed_malformed_message", error=str(e))
            return

        if not isinstance(message, dict) or message.get("type") != NEW_TOKEN_MESSAGE_TYPE:
            return

        try:
            event = LaunchEvent(**normalize(message.get("data"), STREAM_LAUNCH_FIELDS))
        except MalformedPayloadError as e:
            log.warning("launch_feed_malformed_message", error=str(e))
            return

        delivered = self._subscribers.dispatch(event)
        log.debug("launch_event_dispatched", mint=event.mint, delivered=delivered)
