"""Levelled logging with pattern formatting, console and rotating file sinks."""

from __future__ import annotations

import contextlib
import os
import sys
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import IntEnum
from pathlib import Path
from typing import Iterable


class LogLevel(IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    CRITICAL = 5
    OFF = 6


DEFAULT_PATTERN = "%Y-%m-%d %H:%M:%S [%l] %n (%t) %g:%# %f - %v"

_ANSI_COLORS = {
    LogLevel.TRACE: "\033[90m",
    LogLevel.DEBUG: "\033[36m",
    LogLevel.INFO: "\033[32m",
    LogLevel.WARN: "\033[33m",
    LogLevel.ERROR: "\033[31m",
    LogLevel.CRITICAL: "\033[41m",
}
_ANSI_RESET = "\033[0m"


@dataclass
class LoggerConfig:
    name: str = "root"
    level: LogLevel = LogLevel.INFO
    pattern: str = DEFAULT_PATTERN
    use_utc: bool = False
    use_color: bool = True


class Sink(ABC):
    """Destination for formatted log lines."""

    @abstractmethod
    def log(self, line: str, level: LogLevel, colorize: bool) -> None:
        """Emit one formatted line."""


class ConsoleSink(Sink):
    """Writes to stdout; warnings and worse go to stderr when enabled."""

    def __init__(self, use_stderr_for_warn: bool = True) -> None:
        self.use_stderr_for_warn = use_stderr_for_warn

    def log(self, line: str, level: LogLevel, colorize: bool) -> None:
        stream = sys.stdout
        if self.use_stderr_for_warn and level >= LogLevel.WARN:
            stream = sys.stderr
        if colorize:
            stream.write(f"{_ANSI_COLORS.get(level, '')}{line}{_ANSI_RESET}\n")
        else:
            stream.write(f"{line}\n")
        stream.flush()


class FileSink(Sink):
    """Appends lines to a file with optional size-based rotation.

    When ``rotate_bytes`` is 0 rotation is disabled. On rotation the current
    file becomes ``<path>.1``, older files shift up to ``<path>.<max_files>``.
    """

    def __init__(
        self, file_path: str | os.PathLike[str], rotate_bytes: int = 0, max_files: int = 3
    ) -> None:
        self._path = Path(file_path)
        self._rotate_bytes = rotate_bytes
        self._max_files = max_files
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._out = open(self._path, "ab")
        except OSError as exc:
            raise RuntimeError(f"FileSink: cannot open file: {self._path}") from exc
        self._size = self._path.stat().st_size if self._path.exists() else 0

    @property
    def path(self) -> Path:
        return self._path

    def __enter__(self) -> FileSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._out.close()

    def log(self, line: str, level: LogLevel, colorize: bool) -> None:
        data = line.encode("utf-8") + b"\n"
        if self._rotate_bytes != 0:
            self._roll_if_needed(len(data))
        self._out.write(data)
        self._out.flush()
        self._size += len(data)

    def _roll_if_needed(self, add_bytes: int) -> None:
        if self._size + add_bytes <= self._rotate_bytes:
            return
        self._out.close()
        self._rotate_files()
        self._out = open(self._path, "wb")
        self._size = 0

    def _numbered(self, index: int) -> Path:
        return Path(f"{self._path}.{index}")

    def _rotate_files(self) -> None:
        if self._max_files <= 0:
            return
        with contextlib.suppress(OSError):
            self._numbered(self._max_files).unlink()
        for i in range(self._max_files - 1, 0, -1):
            src = self._numbered(i)
            if src.exists():
                with contextlib.suppress(OSError):
                    os.replace(src, self._numbered(i + 1))
        if self._path.exists():
            with contextlib.suppress(OSError):
                os.replace(self._path, self._numbered(1))


@dataclass
class ChildOptions:
    """Overrides applied when creating a child logger; None keeps the parent's."""

    level: LogLevel | None = None
    pattern: str | None = None
    use_utc: bool | None = None
    use_color: bool | None = None
    file_path: str | os.PathLike[str] | None = None
    clear_inherited_sinks: bool = False
    rotate_bytes: int = 0
    rotate_max_files: int = 3


_global_logger: Logger | None = None


class Logger:
    """Named logger that formats messages and fans them out to its sinks."""

    def __init__(self, config: LoggerConfig | None = None) -> None:
        self._config = config if config is not None else LoggerConfig()
        self._sinks: list[Sink] = []
        self._lock = threading.Lock()

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def level(self) -> LogLevel:
        return self._config.level

    @level.setter
    def level(self, value: LogLevel) -> None:
        self._config.level = value

    @property
    def sinks(self) -> list[Sink]:
        with self._lock:
            return list(self._sinks)

    def add_sink(self, sink: Sink) -> None:
        with self._lock:
            self._sinks.append(sink)

    def set_sinks(self, sinks: Iterable[Sink]) -> None:
        with self._lock:
            self._sinks = list(sinks)

    def create_child(self, name_suffix: str, options: ChildOptions | None = None) -> Logger:
        """Return a logger named ``<parent>.<suffix>`` sharing this one's sinks."""
        opts = options if options is not None else ChildOptions()
        cfg = replace(self._config)
        cfg.name = f"{self._config.name}.{name_suffix}" if self._config.name else name_suffix
        if opts.level is not None:
            cfg.level = opts.level
        if opts.pattern is not None:
            cfg.pattern = opts.pattern
        if opts.use_utc is not None:
            cfg.use_utc = opts.use_utc
        if opts.use_color is not None:
            cfg.use_color = opts.use_color

        child = Logger(cfg)
        if not opts.clear_inherited_sinks:
            child.set_sinks(self.sinks)
        if opts.file_path is not None:
            child.add_sink(FileSink(opts.file_path, opts.rotate_bytes, opts.rotate_max_files))
        return child

    def log(
        self,
        level: LogLevel,
        message: str,
        file: str = "",
        line: int = 0,
        func: str = "",
    ) -> None:
        if level < self._config.level or self._config.level == LogLevel.OFF:
            return
        text = self.format_line(level, message, file, line, func)
        with self._lock:
            if not self._sinks:
                ConsoleSink().log(text, level, self._config.use_color)
                return
            for sink in self._sinks:
                sink.log(text, level, self._config.use_color)

    def format_line(
        self,
        level: LogLevel,
        message: str,
        file: str = "",
        line: int = 0,
        func: str = "",
    ) -> str:
        """Expand the configured pattern for one message."""
        now = time.time()
        tm = time.gmtime(now) if self._config.use_utc else time.localtime(now)
        fields = {
            "Y": f"{tm.tm_year:04d}",
            "m": f"{tm.tm_mon:02d}",
            "d": f"{tm.tm_mday:02d}",
            "H": f"{tm.tm_hour:02d}",
            "M": f"{tm.tm_min:02d}",
            "S": f"{tm.tm_sec:02d}",
            "l": level.name,
            "n": self._config.name,
            "t": str(threading.get_ident()),
            "g": file,
            "#": str(line),
            "f": func,
            "v": message,
            "%": "%",
        }
        pattern = self._config.pattern
        out: list[str] = []
        chars = iter(range(len(pattern)))
        for i in chars:
            ch = pattern[i]
            if ch == "%" and i + 1 < len(pattern):
                spec = pattern[i + 1]
                out.append(fields.get(spec, "%" + spec))
                next(chars)
            else:
                out.append(ch)
        return "".join(out)

    @staticmethod
    def instance() -> Logger:
        """Return the global logger, creating a console logger on first use."""
        global _global_logger
        if _global_logger is None:
            logger = Logger(LoggerConfig(name="root", level=LogLevel.INFO))
            logger.add_sink(ConsoleSink(True))
            _global_logger = logger
        return _global_logger

    @staticmethod
    def set_instance(logger: Logger | None) -> None:
        global _global_logger
        _global_logger = logger


def _concat(args: tuple[object, ...]) -> str:
    return "".join(str(a) for a in args)


def trace(*args: object) -> None:
    Logger.instance().log(LogLevel.TRACE, _concat(args))


def debug(*args: object) -> None:
    Logger.instance().log(LogLevel.DEBUG, _concat(args))


def info(*args: object) -> None:
    Logger.instance().log(LogLevel.INFO, _concat(args))


def warn(*args: object) -> None:
    Logger.instance().log(LogLevel.WARN, _concat(args))


def error(*args: object) -> None:
    Logger.instance().log(LogLevel.ERROR, _concat(args))


def critical(*args: object) -> None:
    Logger.instance().log(LogLevel.CRITICAL, _concat(args))