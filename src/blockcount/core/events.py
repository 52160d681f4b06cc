"""
Event Decorator System

The @event decorator stores routing metadata on a gesture method and wraps it
in a descriptor. Route registration is handled by the dispatcher.

On an instance the descriptor behaves like the plain method. On the class it
generates the Datastar action string that triggers the matching route, e.g.
``Board.tap("abc")`` -> ``@post('/board/tap?block_id=abc')``.
"""

import functools
import inspect
import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class EventInfo:
    """Metadata about an event method stored by the @event decorator."""
    name: str
    method: str
    signature: inspect.Signature
    path: Optional[str] = None
    namespace: Optional[str] = None
    kwargs: dict = field(default_factory=dict)

    @property
    def parameters(self) -> List[inspect.Parameter]:
        """Event parameters without ``self``."""
        return list(self.signature.parameters.values())[1:]


class EventMethodDescriptor:
    """Generate Datastar action strings for @event methods, but allow direct execution."""

    def __init__(self, original_method: Callable, event_info: EventInfo):
        self.original_method = original_method
        self._event_info = event_info
        functools.update_wrapper(self, original_method)

    def __set_name__(self, owner, name):
        if self._event_info.namespace is None:
            self._event_info.namespace = getattr(owner, "_namespace", None) or owner.__name__.lower()

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return functools.partial(self.original_method, instance)

    @property
    def route_path(self) -> str:
        info = self._event_info
        return info.path or f"/{info.namespace}/{info.name}"

    def __call__(self, *args, **kwargs) -> str:
        """Build the Datastar action string for this event."""
        params: Dict[str, Any] = {}
        names = [p.name for p in self._event_info.parameters]
        for i, arg in enumerate(args):
            if i < len(names):
                params[names[i]] = arg
        params.update({k: v for k, v in kwargs.items() if v is not None})

        http_method = self._event_info.method.lower()
        if params:
            query_string = urllib.parse.urlencode(params, doseq=True)
            return f"@{http_method}('{self.route_path}?{query_string}')"
        return f"@{http_method}('{self.route_path}')"


def event(fn=None, *, method: str = "POST", path: Optional[str] = None, **kwargs):
    """
    Mark a method as a user gesture reachable over HTTP.

    Args:
        fn: Function being decorated (when used without parentheses)
        method: HTTP method for the event route
        path: Custom path for the route (optional)

    Returns:
        EventMethodDescriptor carrying the EventInfo as ``_event_info``
    """
    def decorator(func):
        info = EventInfo(
            name=func.__name__,
            method=method.upper(),
            signature=inspect.signature(func),
            path=path,
            kwargs=kwargs,
        )
        func._event_info = info
        return EventMethodDescriptor(func, info)

    if fn is not None:
        return decorator(fn)

    return decorator


def discover_events(cls) -> Dict[str, EventInfo]:
    """Find all @event methods declared on a class."""
    events = {}
    for name in dir(cls):
        attr = inspect.getattr_static(cls, name, None)
        if isinstance(attr, EventMethodDescriptor):
            events[name] = attr._event_info
    return events
