"""Call-timing instrumentation.

Methods marked with `@profiled` are timed when called through a proxy returned
by `Profiler.wrap`. Elapsed time is summed per (declaring class, method name)
in a shared `ProfilingState`, which can be written out after a run.
"""
from __future__ import annotations

import functools
import inspect
import logging
import threading
from datetime import timedelta
from pathlib import Path
from typing import Dict, Optional, TextIO, Tuple

from wordcrawl.utils.clock import Clock, SystemClock, format_duration

logger = logging.getLogger(__name__)

_PROFILED_ATTR = "__wordcrawl_profiled__"


def profiled(func):
    """Mark a method so calls made through a profiling proxy are timed."""
    setattr(func, _PROFILED_ATTR, True)
    return func


def _is_profiled(obj) -> bool:
    return callable(obj) and getattr(obj, _PROFILED_ATTR, False)


def _declaring_class(klass: type, name: str) -> type:
    for base in klass.__mro__:
        if name in vars(base):
            return base
    return klass


class ProfilingState:
    """Thread-safe totals of elapsed time per profiled method."""

    def __init__(self):
        self._lock = threading.Lock()
        self._data: Dict[str, timedelta] = {}

    @staticmethod
    def key_for(klass: type, method_name: str) -> str:
        return f"{klass.__module__}.{klass.__qualname__}#{method_name}"

    def record(self, klass: type, method_name: str, elapsed: timedelta) -> None:
        if elapsed < timedelta(0):
            raise ValueError("elapsed time must not be negative")
        key = self.key_for(klass, method_name)
        with self._lock:
            self._data[key] = self._data.get(key, timedelta(0)) + elapsed

    def get(self, klass: type, method_name: str) -> Optional[timedelta]:
        with self._lock:
            return self._data.get(self.key_for(klass, method_name))

    def write(self, stream: TextIO) -> None:
        with self._lock:
            items: Tuple[Tuple[str, timedelta], ...] = tuple(sorted(self._data.items()))
        for key, elapsed in items:
            stream.write(f"{key} took {format_duration(elapsed)}\n")

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class _ProfilingProxy:
    """Forwards attribute access to the delegate, timing profiled methods."""

    def __init__(self, delegate, state: ProfilingState, clock: Clock):
        object.__setattr__(self, "_delegate", delegate)
        object.__setattr__(self, "_state", state)
        object.__setattr__(self, "_clock", clock)

    def __getattr__(self, name):
        delegate = object.__getattribute__(self, "_delegate")
        attr = getattr(delegate, name)
        if not _is_profiled(attr):
            return attr
        state = object.__getattribute__(self, "_state")
        clock = object.__getattribute__(self, "_clock")
        declaring = _declaring_class(type(delegate), name)

        @functools.wraps(attr)
        def timed(*args, **kwargs):
            start = clock.now()
            try:
                return attr(*args, **kwargs)
            finally:
                state.record(declaring, name, clock.now() - start)

        return timed

    def __setattr__(self, name, value):
        setattr(object.__getattribute__(self, "_delegate"), name, value)

    def __eq__(self, other):
        delegate = object.__getattribute__(self, "_delegate")
        if isinstance(other, _ProfilingProxy):
            other = object.__getattribute__(other, "_delegate")
        return delegate == other

    def __hash__(self):
        return hash(object.__getattribute__(self, "_delegate"))

    def __repr__(self):
        return f"<Profiled {object.__getattribute__(self, '_delegate')!r}>"


class Profiler:
    def __init__(self, clock: Optional[Clock] = None, state: Optional[ProfilingState] = None):
        self.clock = clock if clock is not None else SystemClock()
        self.state = state if state is not None else ProfilingState()

    def wrap(self, delegate):
        """Return a proxy for `delegate` that times its `@profiled` methods.

        Raises ValueError if the delegate's class declares no profiled method.
        """
        has_profiled = any(
            _is_profiled(member) for _, member in inspect.getmembers(type(delegate))
        )
        if not has_profiled:
            raise ValueError(
                f"{type(delegate).__name__} must have at least one @profiled method"
            )
        return _ProfilingProxy(delegate, self.state, self.clock)

    def write_data(self, path: str) -> None:
        """Append this run's profiling data to `path`, creating it if needed."""
        target = Path(path)
        if target.parent and not target.parent.exists():
            target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("a", encoding="utf-8") as fh:
            self.write_data_to(fh)
        logger.info("Wrote profiling data to %s", target)

    def write_data_to(self, stream: TextIO) -> None:
        stream.write(f"Run at {self.clock.now().isoformat()}\n")
        self.state.write(stream)
        stream.write("\n")
        stream.flush()
