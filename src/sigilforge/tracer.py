"""
Hierarchical runtime tracing for the SigilForge pipeline.

Nested, timed spans make it possible to follow layout generation,
intersection search and layout scoring without stepping through code.
"""

import functools
import hashlib
import json
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from enum import Enum


class TracerConfig:
    """Configuration for the tracer."""

    def __init__(self):
        self.enabled = False
        self.level = "INFO"
        self.file_path = None
        self.json_output = False
        self._file_handle = None

    def configure(self, enabled=False, level="INFO", file_path=None, json_output=False):
        """Configure tracer settings."""
        self.enabled = enabled
        self.level = level.upper()
        self.file_path = file_path
        self.json_output = json_output

        self.close()
        if file_path and enabled:
            self._file_handle = open(file_path, "w", encoding="utf-8")

    def close(self):
        """Close file handle if open."""
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None


class Tracer:
    """
    Hierarchical tracer for structured pipeline logging.

    Spans nest and report their wall time; events attach to the innermost
    open span. Output goes to stderr as text, optionally mirrored to a file
    and optionally accompanied by one JSON record per line.
    """

    LEVELS = {"ERROR": 0, "WARN": 1, "INFO": 2, "DEBUG": 3}

    def __init__(self):
        self.config = TracerConfig()
        self._depth = 0
        self._span_stack = []

    def _should_log(self, level):
        if not self.config.enabled:
            return False
        return self.LEVELS.get(level, 2) <= self.LEVELS.get(self.config.level, 2)

    def _format_timestamp(self):
        now = datetime.now()
        return now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"

    def _emit(self, line):
        print(line, file=sys.stderr)
        handle = self.config._file_handle
        if handle:
            handle.write(line + "\n")
            handle.flush()

    def _write(self, level, module, func, message, meta=None):
        """Write a log line."""
        if not self._should_log(level):
            return

        timestamp = self._format_timestamp()
        location = f"{module}:{func}" if func else module
        self._emit(f"{timestamp} {level:<5} {'  ' * self._depth}{location}  {message}")

        if self.config.json_output:
            record = {
                "timestamp": timestamp,
                "level": level,
                "depth": self._depth,
                "module": module,
                "function": func,
                "message": message,
                "meta": {k: summarize(v) for k, v in (meta or {}).items()},
            }
            self._emit(json.dumps(record))

    @contextmanager
    def span(self, name, module="", **meta):
        """
        Context manager for a traced span.

        Logs start and end with timing information; a failing span logs the
        exception type and re-raises.
        """
        if not self.config.enabled:
            yield
            return

        start_time = time.perf_counter()
        meta_str = " ".join(f"{k}={summarize(v)}" for k, v in meta.items())
        self._write("INFO", module, name, f"start {meta_str}".strip(), meta)
        self._depth += 1
        self._span_stack.append((name, module, start_time))

        try:
            yield
        except Exception as e:
            elapsed = (time.perf_counter() - start_time) * 1000
            self._depth -= 1
            self._span_stack.pop()
            self._write("ERROR", module, name, f"failed dt={elapsed:.0f}ms error={type(e).__name__}: {str(e)[:100]}")
            raise
        else:
            elapsed = (time.perf_counter() - start_time) * 1000
            self._depth -= 1
            self._span_stack.pop()
            self._write("INFO", module, name, f"end ok dt={elapsed:.0f}ms")

    def event(self, message, level="INFO", **meta):
        """Log a one-off event within the current span."""
        if not self._should_log(level):
            return

        module = ""
        func = ""
        if self._span_stack:
            func, module, _ = self._span_stack[-1]

        meta_str = " ".join(f"{k}={summarize(v)}" for k, v in meta.items())
        full_message = f"{message} {meta_str}".strip()
        self._write(level, module, func, full_message, meta)


def summarize(obj, max_len=200):
    """
    Summarize an object for logging.

    Returns a compact string that never exceeds max_len chars. Knows about
    numpy arrays, the pipeline's pydantic models, sequences, dicts and strings.
    """
    try:
        result = _summarize_impl(obj)
    except Exception:
        result = f"<{type(obj).__name__}>"
    if len(result) > max_len:
        return result[:max_len - 3] + "..."
    return result


def _summarize_impl(obj):
    if obj is None:
        return "None"

    type_name = type(obj).__name__

    try:
        import numpy as np
        if isinstance(obj, np.ndarray):
            shape_str = "x".join(str(s) for s in obj.shape)
            h = hashlib.md5(obj.tobytes()).hexdigest()[:8] if 0 < obj.size < 1000 else "-"
            return f"ndarray({obj.dtype},{shape_str},h={h})"
    except ImportError:
        pass

    from pydantic import BaseModel

    if isinstance(obj, BaseModel):
        return _summarize_model(obj, type_name)

    if isinstance(obj, Enum):
        return str(obj.value)

    if isinstance(obj, str):
        if len(obj) > 50:
            h = hashlib.md5(obj.encode()).hexdigest()[:8]
            return f"str(len={len(obj)},h={h})"
        return repr(obj)

    if isinstance(obj, (list, tuple)):
        if not obj:
            return f"{type_name}(len=0)"
        return f"{type_name}(len={len(obj)},first={type(obj[0]).__name__})"

    if isinstance(obj, dict):
        keys = ",".join(str(getattr(k, "value", k)) for k in list(obj.keys())[:5])
        return f"dict(len={len(obj)},keys=[{keys}])"

    if isinstance(obj, float):
        return f"{obj:.4g}"

    if isinstance(obj, int):
        return str(obj)

    return f"<{type_name}>"


def _summarize_model(model, type_name):
    """Pick the fields that say most about each pipeline model."""
    if type_name == "Sigil":
        return (
            f"Sigil({model.mode.value},segments={len(model.segments)},"
            f"intersections={len(model.intersections)},dots={len(model.arc_dots)})"
        )
    if type_name == "Layout":
        return f"Layout({model.mode.value},points={len(model.points)},rings={len(model.ring_radii)})"
    if type_name == "HeatAnalysis":
        return f"HeatAnalysis(score={model.global_score},zones={len(model.zones)},hot={model.is_hot})"
    if type_name == "LetterSet":
        return f"LetterSet({''.join(model.letters)!r})"
    if type_name == "SelectionResult":
        return f"SelectionResult(layouts={len(model.layouts)},recommended={model.recommended.value})"
    names = list(type(model).model_fields.keys())[:3]
    return f"{type_name}(fields={names}...)"


def trace(label=None, arg_names=None):
    """
    Decorator to trace function execution.

    Wraps a function in a span that logs start/end with timing. Keyword
    arguments listed in arg_names are summarized into the span header.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not _tracer.config.enabled:
                return func(*args, **kwargs)

            func_module = func.__module__.split(".")[-1] if func.__module__ else ""
            func_name = label or func.__name__

            meta = {}
            for name in arg_names or ():
                if name in kwargs:
                    meta[name] = kwargs[name]

            with _tracer.span(func_name, module=func_module, **meta):
                return func(*args, **kwargs)

        return wrapper
    return decorator


# Global tracer instance
_tracer = Tracer()


def get_tracer():
    """Get the global tracer instance."""
    return _tracer


def configure_tracer(enabled=False, level="INFO", file_path=None, json_output=False):
    """Configure the global tracer."""
    _tracer.config.configure(
        enabled=enabled,
        level=level,
        file_path=file_path,
        json_output=json_output,
    )
