"""Input events and a per-view pre/post hook registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional

FRAME_SWITCH = "switch-frame"


@dataclass(frozen=True, slots=True)
class InputEvent:
    """Normalized input event delivered to hooks."""

    kind: str
    key: Optional[str] = None

    @property
    def is_frame_switch(self) -> bool:
        return self.kind == FRAME_SWITCH


Hook = Callable[[InputEvent], None]


class EventHookRegistry:
    """Holds pre- and post-event hooks per view and dispatches events.

    Hooks may remove themselves (or others) while an event is dispatched;
    each phase iterates over a snapshot taken when the phase starts.
    """

    def __init__(self) -> None:
        self._pre: Dict[Hashable, List[Hook]] = {}
        self._post: Dict[Hashable, List[Hook]] = {}
        self._last: Optional[InputEvent] = None

    def add_pre_event_hook(self, view: Hashable, hook: Hook) -> None:
        _add(self._pre, view, hook)

    def remove_pre_event_hook(self, view: Hashable, hook: Hook) -> None:
        _remove(self._pre, view, hook)

    def add_post_event_hook(self, view: Hashable, hook: Hook) -> None:
        _add(self._post, view, hook)

    def remove_post_event_hook(self, view: Hashable, hook: Hook) -> None:
        _remove(self._post, view, hook)

    def last_input_event(self) -> Optional[InputEvent]:
        return self._last

    def pre_hooks(self, view: Hashable) -> tuple[Hook, ...]:
        return tuple(self._pre.get(view, ()))

    def post_hooks(self, view: Hashable) -> tuple[Hook, ...]:
        return tuple(self._post.get(view, ()))

    def dispatch(
        self,
        view: Hashable,
        event: InputEvent,
        command: Optional[Callable[[], object]] = None,
    ) -> None:
        """Run pre hooks, ``command`` (if any), then post hooks for ``view``."""

        self.begin(view, event)
        if command is not None:
            command()
        self.finish(view, event)

    def begin(self, view: Hashable, event: InputEvent) -> None:
        self._last = event
        for hook in self.pre_hooks(view):
            hook(event)

    def finish(self, view: Hashable, event: InputEvent) -> None:
        for hook in self.post_hooks(view):
            hook(event)


def _add(table: Dict[Hashable, List[Hook]], view: Hashable, hook: Hook) -> None:
    hooks = table.setdefault(view, [])
    if hook not in hooks:
        hooks.append(hook)


def _remove(table: Dict[Hashable, List[Hook]], view: Hashable, hook: Hook) -> None:
    hooks = table.get(view)
    if not hooks:
        return
    if hook in hooks:
        hooks.remove(hook)
    if not hooks:
        table.pop(view, None)


__all__ = ["FRAME_SWITCH", "EventHookRegistry", "Hook", "InputEvent"]
