"""Delimited text persistence for rows of floats."""
from __future__ import annotations

import os
import stat
import tempfile
from typing import Iterable, Sequence

__all__: list[str] = [
    "StorageError",
    "check_separator",
    "format_value",
    "read_rows",
    "write_rows",
]


class StorageError(ValueError):
    """Raised when a file cannot be read, written or parsed."""


def check_separator(separator: str) -> str:
    if not isinstance(separator, str) or len(separator) != 1 or separator in "\r\n":
        raise ValueError(f"separator must be a single character other than a line break, got {separator!r}")
    return separator


def format_value(value: float) -> str:
    # repr() gives the shortest text that parses back to the same double
    return repr(float(value))


def write_rows(path: str | os.PathLike, rows: Iterable[Sequence[float]], separator: str = ",") -> None:
    """
    Write rows of floats to `path`, one row per line.
    The file is written next to the target and renamed over it, so the target
    is either fully replaced or left as it was.
    Raises StorageError on I/O failure.
    """
    check_separator(separator)
    target = os.fspath(path)
    directory = os.path.dirname(os.path.abspath(target))
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=".vectorfloat-", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise StorageError(f"cannot write {target}: {exc}") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            for row in rows:
                fh.write(separator.join(format_value(v) for v in row))
                fh.write("\n")
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_path, _target_mode(target))
        os.replace(tmp_path, target)
    except OSError as exc:
        _discard(tmp_path)
        raise StorageError(f"cannot write {target}: {exc}") from exc
    except BaseException:
        _discard(tmp_path)
        raise


def _target_mode(target: str) -> int:
    # mkstemp creates 0600 files; keep the existing mode, or what open() would give a new file
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _discard(tmp_path: str) -> None:
    try:
        os.unlink(tmp_path)
    except FileNotFoundError:
        pass


def read_rows(path: str | os.PathLike, separator: str = ",") -> list[list[float]]:
    """
    Parse a delimited text file into rows of floats.
    Blank lines are skipped. Every row must have the same number of fields.
    Raises StorageError for unreadable, empty or malformed files.
    """
    check_separator(separator)
    source = os.fspath(path)
    try:
        with open(source, "r", encoding="utf-8", newline=None) as fh:
            lines = fh.read().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"cannot read {source}: {exc}") from exc

    rows: list[list[float]] = []
    width = None
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        tokens = [tok.strip() for tok in line.split(separator)]
        if width is None:
            width = len(tokens)
        elif len(tokens) != width:
            raise StorageError(
                f"{source}:{lineno}: expected {width} fields, found {len(tokens)}"
            )
        row = []
        for tok in tokens:
            if not tok:
                raise StorageError(f"{source}:{lineno}: empty field")
            try:
                row.append(float(tok))
            except ValueError as exc:
                raise StorageError(f"{source}:{lineno}: not a number: {tok!r}") from exc
        rows.append(row)

    if not rows:
        raise StorageError(f"{source}: file contains no data rows")
    return rows
