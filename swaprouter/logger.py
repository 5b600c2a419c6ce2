"""Leveled logging with key/value fields, text or JSON output and hourly file rotation.

Levels follow the numbering 0 panic, 1 fatal, 2 error, 3 warn, 4 info,
5 debug, 6 trace. Fatal messages raise ``SystemExit(1)`` after logging and
panic messages raise :class:`LogPanic`.
"""

from __future__ import annotations

import glob
import json
import logging
import os
import re
import sys
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, TextIO

__all__ = [
    "TRACE",
    "DEBUG",
    "INFO",
    "WARN",
    "ERROR",
    "FATAL",
    "PANIC",
    "LogPanic",
    "set_logger",
    "set_log_file",
    "with_fields",
    "get_print_func_or",
    "null",
    "trace",
    "tracef",
    "debug",
    "debugf",
    "info",
    "infof",
    "warn",
    "warnf",
    "error",
    "errorf",
    "fatal",
    "fatalf",
    "crit",
    "critf",
    "panic",
    "panicf",
]

TRACE = 5
DEBUG = logging.DEBUG
INFO = logging.INFO
WARN = logging.WARNING
ERROR = logging.ERROR
FATAL = logging.CRITICAL
PANIC = 60

_LEVEL_NAMES = {
    TRACE: "trace",
    DEBUG: "debug",
    INFO: "info",
    WARN: "warning",
    ERROR: "error",
    FATAL: "fatal",
    PANIC: "panic",
}
_LEVEL_COLORS = {
    TRACE: 37,
    DEBUG: 37,
    INFO: 36,
    WARN: 33,
    ERROR: 31,
    FATAL: 31,
    PANIC: 31,
}
_THRESHOLDS = (PANIC, FATAL, ERROR, WARN, INFO, DEBUG, TRACE)
_RESERVED_KEYS = ("time", "msg", "level")
_HTML_ESCAPES = (("<", "\\u003c"), (">", "\\u003e"), ("&", "\\u0026"))
_GO_VERB = re.compile(r"%%|%[+#]?v")


class LogPanic(Exception):
    """Raised after a message is logged at panic level."""

    def __init__(self, message: str, fields: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.fields = dict(fields or {})


def _sprintf(fmt: str, args: tuple[Any, ...]) -> str:
    if not args:
        return fmt
    pattern = _GO_VERB.sub(lambda m: "%%" if m.group(0) == "%%" else "%s", fmt)
    try:
        return pattern % args
    except (TypeError, ValueError):
        return " ".join([fmt, *map(str, args)])


def _timestamp(created: float) -> str:
    moment = datetime.fromtimestamp(created)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}"


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname.lower())


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key, value in getattr(record, "fields", {}).items():
        if key in _RESERVED_KEYS:
            key = "fields." + key
        fields[key] = str(value) if isinstance(value, BaseException) else value
    return fields


def _quote(value: Any) -> str:
    return json.dumps(str(value), ensure_ascii=False)


class _JSONFormatter(logging.Formatter):
    def __init__(self, escape_html: bool) -> None:
        super().__init__()
        self.escape_html = escape_html

    def format(self, record: logging.LogRecord) -> str:
        data = _record_fields(record)
        data["time"] = _timestamp(record.created)
        data["msg"] = record.getMessage()
        data["level"] = _level_name(record)
        text = json.dumps(
            data,
            sort_keys=True,
            default=str,
            ensure_ascii=False,
            separators=(",", ":"),
        )
        if self.escape_html:
            for char, escaped in _HTML_ESCAPES:
                text = text.replace(char, escaped)
        return text


class _TextFormatter(logging.Formatter):
    def __init__(self, colors: bool) -> None:
        super().__init__()
        self.colors = colors

    def format(self, record: logging.LogRecord) -> str:
        fields = sorted(_record_fields(record).items())
        level = _level_name(record)
        message = record.getMessage()
        stamp = _timestamp(record.created)
        if self.colors:
            color = _LEVEL_COLORS.get(record.levelno, 36)
            head = (
                f"\x1b[{color}m{level.upper()[:4]}\x1b[0m[{stamp}] "
                f"{message.rstrip(chr(10)):<44} "
            )
            return head + "".join(
                f" \x1b[{color}m{key}\x1b[0m={_quote(value)}" for key, value in fields
            )
        pairs = [("time", stamp), ("level", level), ("msg", message), *fields]
        return " ".join(f"{key}={_quote(value)}" for key, value in pairs)


class _ConsoleHandler(logging.Handler):
    """Writes to whatever stream the getter returns at the time of each record."""

    def __init__(self, stream_getter: Callable[[], TextIO]) -> None:
        super().__init__()
        self._stream_getter = stream_getter

    def emit(self, record: logging.LogRecord) -> None:
        try:
            stream = self._stream_getter()
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)


class _RotatingFileHandler(logging.Handler):
    """Writes to ``PATH.%Y%m%d%H`` files, keeps ``PATH`` linked to the newest one
    and removes files older than the maximum age."""

    def __init__(self, link_path: str, rotation_seconds: int, max_age_seconds: int) -> None:
        super().__init__()
        self.link_path = link_path
        self.rotation_seconds = rotation_seconds
        self.max_age_seconds = max_age_seconds
        self._stream: TextIO | None = None
        self._filename: str | None = None
        self._open_for(time.time())

    def _filename_for(self, moment: float) -> str:
        if self.rotation_seconds > 0:
            moment -= moment % self.rotation_seconds
        return f"{self.link_path}.{time.strftime('%Y%m%d%H', time.localtime(moment))}"

    def _open_for(self, moment: float) -> None:
        filename = self._filename_for(moment)
        if filename == self._filename:
            return
        os.makedirs(os.path.dirname(filename), exist_ok=True)
        stream = open(filename, "a", encoding="utf-8")
        if self._stream is not None:
            self._stream.close()
        self._stream, self._filename = stream, filename
        self._link(filename)
        self._purge(moment)

    def _link(self, filename: str) -> None:
        staging = self.link_path + "_symlink"
        try:
            if os.path.lexists(staging):
                os.remove(staging)
            os.symlink(filename, staging)
            os.replace(staging, self.link_path)
        except OSError:
            pass

    def _purge(self, moment: float) -> None:
        if self.max_age_seconds <= 0:
            return
        cutoff = moment - self.max_age_seconds
        for path in glob.glob(glob.escape(self.link_path) + ".*"):
            if path == self._filename:
                continue
            try:
                if os.lstat(path).st_mtime < cutoff:
                    os.remove(path)
            except OSError:
                pass

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._open_for(record.created)
            assert self._stream is not None
            self._stream.write(self.format(record) + "\n")
            self._stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None
            self._filename = None
        super().close()


@dataclass
class _State:
    json_format: bool
    formatter: logging.Formatter
    handler: logging.Handler | None = None


_logger = logging.getLogger("swaprouter")
_logger.propagate = False
_logger.setLevel(INFO)
_state = _State(json_format=False, formatter=_TextFormatter(colors=False))


def _set_formatter(formatter: logging.Formatter) -> None:
    _state.formatter = formatter
    if _state.handler is not None:
        _state.handler.setFormatter(formatter)


def _install(handler: logging.Handler) -> None:
    handler.setFormatter(_state.formatter)
    old = _state.handler
    if old is not None:
        _logger.removeHandler(old)
        old.close()
    _logger.addHandler(handler)
    _state.handler = handler


_install(_ConsoleHandler(lambda: sys.stderr))


def set_logger(log_level: int, json_format: bool, color_format: bool) -> None:
    """Log to standard output at the given level, as JSON or as (colored) text."""
    if log_level < 0:
        raise ValueError(f"invalid log level {log_level}")
    _logger.setLevel(_THRESHOLDS[min(log_level, len(_THRESHOLDS) - 1)])
    _state.json_format = bool(json_format)
    if _state.json_format:
        _set_formatter(_JSONFormatter(escape_html=False))
    else:
        _set_formatter(_TextFormatter(colors=bool(color_format)))
    _install(_ConsoleHandler(lambda: sys.stdout))


def set_log_file(log_file: str, log_rotation: int, log_max_age: int) -> None:
    """Send logs, always as JSON, to hourly rotated files next to log_file.

    A new file starts every ``log_rotation`` hours and files older than
    ``log_max_age`` hours are removed. An empty path leaves output unchanged.
    """
    if not log_file:
        return
    if not _state.json_format:
        _state.json_format = True
        _set_formatter(_JSONFormatter(escape_html=True))
    path = os.path.abspath(log_file)
    try:
        handler = _RotatingFileHandler(path, log_rotation * 3600, log_max_age * 3600)
    except OSError as err:
        fatalf("Failed to Initialize Log File %v", err)
        return
    _install(handler)


class _Entry:
    """A set of fields attached to the messages logged through it."""

    def __init__(self, fields: dict[str, Any]) -> None:
        self.fields = fields

    def _log(self, level: int, msg: str) -> None:
        _logger.log(level, msg, extra={"fields": self.fields})

    def trace(self, msg: str) -> None:
        self._log(TRACE, msg)

    def tracef(self, fmt: str, *args: Any) -> None:
        self._log(TRACE, _sprintf(fmt, args))

    def debug(self, msg: str) -> None:
        self._log(DEBUG, msg)

    def debugf(self, fmt: str, *args: Any) -> None:
        self._log(DEBUG, _sprintf(fmt, args))

    def info(self, msg: str) -> None:
        self._log(INFO, msg)

    def infof(self, fmt: str, *args: Any) -> None:
        self._log(INFO, _sprintf(fmt, args))

    def print(self, msg: str) -> None:
        self._log(INFO, msg)

    def printf(self, fmt: str, *args: Any) -> None:
        self._log(INFO, _sprintf(fmt, args))

    def warn(self, msg: str) -> None:
        self._log(WARN, msg)

    def warnf(self, fmt: str, *args: Any) -> None:
        self._log(WARN, _sprintf(fmt, args))

    def error(self, msg: str) -> None:
        self._log(ERROR, msg)

    def errorf(self, fmt: str, *args: Any) -> None:
        self._log(ERROR, _sprintf(fmt, args))

    def fatal(self, msg: str) -> None:
        self._log(FATAL, msg)
        raise SystemExit(1)

    def fatalf(self, fmt: str, *args: Any) -> None:
        self.fatal(_sprintf(fmt, args))

    def panic(self, msg: str) -> None:
        self._log(PANIC, msg)
        raise LogPanic(msg, self.fields)

    def panicf(self, fmt: str, *args: Any) -> None:
        self.panic(_sprintf(fmt, args))


def with_fields(*args: Any) -> _Entry:
    """Build an entry from alternating keys and values; non-string keys are dropped."""
    if len(args) % 2:
        debugf("log fields number %v is not even", len(args))
    fields: dict[str, Any] = {}
    for key, value in zip(args[::2], args[1::2]):
        if isinstance(key, str):
            fields[key] = value
        else:
            debugf("log field key '%v' is not string", key)
    return _Entry(fields)


def get_print_func_or(
    predicate: Callable[[], bool],
    target_func: Callable[..., None],
    other_func: Callable[..., None],
) -> Callable[..., None]:
    """Return target_func if predicate() holds, otherwise other_func."""
    return target_func if predicate() else other_func


def null(msg: str, *args: Any) -> None:
    """Discard the message."""


def trace(msg: str, *args: Any) -> None:
    with_fields(*args).trace(msg)


def tracef(fmt: str, *args: Any) -> None:
    _Entry({}).tracef(fmt, *args)


def debug(msg: str, *args: Any) -> None:
    with_fields(*args).debug(msg)


def debugf(fmt: str, *args: Any) -> None:
    _Entry({}).debugf(fmt, *args)


def info(msg: str, *args: Any) -> None:
    with_fields(*args).info(msg)


def infof(fmt: str, *args: Any) -> None:
    _Entry({}).infof(fmt, *args)


def warn(msg: str, *args: Any) -> None:
    with_fields(*args).warn(msg)


def warnf(fmt: str, *args: Any) -> None:
    _Entry({}).warnf(fmt, *args)


def error(msg: str, *args: Any) -> None:
    with_fields(*args).error(msg)


def errorf(fmt: str, *args: Any) -> None:
    _Entry({}).errorf(fmt, *args)


def fatal(msg: str, *args: Any) -> None:
    with_fields(*args).fatal(msg)


def fatalf(fmt: str, *args: Any) -> None:
    _Entry({}).fatalf(fmt, *args)


def crit(msg: str, *args: Any) -> None:
    """Alias of :func:`fatal`."""
    fatal(msg, *args)


def critf(fmt: str, *args: Any) -> None:
    """Alias of :func:`fatalf`."""
    fatalf(fmt, *args)


def panic(msg: str, *args: Any) -> None:
    with_fields(*args).panic(msg)


def panicf(fmt: str, *args: Any) -> None:
    _Entry({}).panicf(fmt, *args)