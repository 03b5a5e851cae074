"""
Function tracing decorator.

Routes entry/exit lines through an Emitter on a caller-chosen topic,
so tracing is switched on and off with the same mask as every other
diagnostic. When the topic is filtered out the wrapped call costs one
mask check.
"""

import functools
import inspect
from pathlib import Path

from .emitter import get_emitter
from .topic import Topic


def _short_repr(value, key=None):
    if isinstance(value, Path):
        text = f"Path('{value}')"
    elif isinstance(value, str) and len(value) > 50:
        text = f"'{value[:47]}...'"
    elif isinstance(value, (list, tuple)) and len(value) > 3:
        text = f"[...{len(value)} items...]"
    else:
        text = repr(value)
    return f"{key}={text}" if key else text


def trace(topic: Topic, mask=None, emitter=None):
    """Decorator factory tracing calls on ``topic``.

    Args:
        topic: Topic the trace lines are written on
        mask: Mask to check (None uses the emitter's mask)
        emitter: Emitter to write through (None uses the singleton,
                 looked up at call time)

    Usage::

        @trace(TRACE)
        def load(path): ...
    """
    def decorator(func):
        module = inspect.getmodule(func)
        where = f"{module.__name__ if module else 'unknown'}.{func.__name__}"
        # Methods show their receiver by parameter name (self or cls)
        params = list(inspect.signature(func).parameters)
        is_method = bool(params) and params[0] in ("self", "cls")

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            out = emitter or get_emitter()
            if not out.active(topic, mask):
                return func(*args, **kwargs)

            if args and is_method:
                rendered = [params[0]] + [_short_repr(a) for a in args[1:]]
            else:
                rendered = [_short_repr(a) for a in args]
            rendered += [_short_repr(v, k) for k, v in kwargs.items()]

            out.dbg(topic, f">> {where}({', '.join(rendered)})", mask=mask)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                out.dbg(topic, f"!! {where} raised: {type(e).__name__}: {e}", mask=mask)
                raise
            if result is not None:
                out.dbg(topic, lambda: f"<< {where} returned: {_short_repr(result)}", mask=mask)
            return result

        return wrapper
    return decorator
