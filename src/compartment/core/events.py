"""Build-phase notifications.

Observers subscribe to a :class:`NotificationHub` and are called inline, in
registration order, whenever the resolver reaches one of the
:class:`BuildPhase` points. There is no queue: an emit returns only after every
matching listener has returned, and listener exceptions propagate to the
caller of the operation that emitted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BuildPhase(str, Enum):
    """Lifecycle points announced by the resolver.

    Attributes
    ----------
    PRE_BUILD
        A normalized selection is about to be resolved.
    POST_BUILD
        A chain has been resolved, filtered and sorted.
    PATHS
        A path list has been aggregated for one type.
    """

    PRE_BUILD = "preBuild"
    POST_BUILD = "postBuild"
    PATHS = "paths"


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """One notification delivered to listeners.

    Parameters
    ----------
    phase : BuildPhase
        Lifecycle point.
    payload : Any
        Selection tuple for ``PRE_BUILD``, the chain for ``POST_BUILD`` and
        the path list for ``PATHS``.
    type_name : str | None, optional
        Type the paths were collected for (``PATHS`` only).
    """

    phase: BuildPhase
    payload: Any
    type_name: str | None = None


Listener = Callable[[BuildEvent], None]


@dataclass(frozen=True, slots=True)
class Subscription:
    """Handle returned by :meth:`NotificationHub.subscribe`."""

    listener: Listener
    phases: frozenset[BuildPhase]

    def accepts(self, phase: BuildPhase) -> bool:
        return phase in self.phases


class NotificationHub:
    """Ordered list of listeners invoked synchronously on emit."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self,
        listener: Listener,
        phases: Iterable[BuildPhase | str] | None = None,
    ) -> Subscription:
        """Register a listener.

        Parameters
        ----------
        listener : Callable[[BuildEvent], None]
            Callback receiving each matching event.
        phases : Iterable[BuildPhase | str] | None, optional
            Phases the listener cares about. ``None`` means every phase.

        Returns
        -------
        Subscription
            Handle accepted by :meth:`unsubscribe`.
        """

        if not callable(listener):
            raise TypeError("listener must be callable")
        selected = frozenset(BuildPhase) if phases is None else frozenset(BuildPhase(p) for p in phases)
        subscription = Subscription(listener=listener, phases=selected)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a listener; unknown handles are ignored."""

        self._subscriptions = [item for item in self._subscriptions if item is not subscription]

    def emit(self, phase: BuildPhase, payload: Any, *, type_name: str | None = None) -> BuildEvent:
        """Deliver one event to every matching listener and return it."""

        event = BuildEvent(phase=BuildPhase(phase), payload=payload, type_name=type_name)
        # Snapshot so listeners may (un)subscribe while being notified.
        for subscription in tuple(self._subscriptions):
            if subscription.accepts(event.phase):
                subscription.listener(event)
        return event

    def __len__(self) -> int:
        return len(self._subscriptions)


@dataclass(slots=True)
class EventRecorder:
    """Listener that keeps every received event in arrival order.

    Parameters
    ----------
    events : list[BuildEvent]
        Recorded events, appended on each call.
    """

    events: list[BuildEvent] = field(default_factory=list)

    def __call__(self, event: BuildEvent) -> None:
        self.events.append(event)

    def by_phase(self, phase: BuildPhase | str) -> list[BuildEvent]:
        """Return recorded events for one phase, in arrival order."""

        wanted = BuildPhase(phase)
        return [event for event in self.events if event.phase is wanted]

    @property
    def phases(self) -> tuple[BuildPhase, ...]:
        """Phase sequence of everything recorded so far."""

        return tuple(event.phase for event in self.events)


__all__ = [
    "BuildEvent",
    "BuildPhase",
    "EventRecorder",
    "Listener",
    "NotificationHub",
    "Subscription",
]
