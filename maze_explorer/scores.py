"""High-score persistence.

Scores live in a plain UTF-8 file, one ``name,seconds`` record per line.
The file is only ever appended to; reading tolerates hand edits and partial
writes by skipping any line that is not exactly two fields with a
non-negative integer time.
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Anonymous"

# One lock per score file, shared by every store pointing at it
_FILE_LOCKS: Dict[Path, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(key, threading.Lock())


@dataclass(frozen=True)
class ScoreEntry:
    name: str
    seconds: int

    def as_tuple(self):
        return (self.name, self.seconds)


def clean_name(name: Optional[str]) -> str:
    if name is None:
        return DEFAULT_NAME
    # Keep each record on one line with exactly two fields
    cleaned = " ".join(name.replace(",", " ").split())
    return cleaned or DEFAULT_NAME


def parse_record(line: str) -> Optional[ScoreEntry]:
    parts = line.rstrip("\r\n").split(",")
    if len(parts) != 2:
        return None
    name, raw_seconds = parts
    try:
        seconds = int(raw_seconds)
    except ValueError:
        return None
    if seconds < 0:
        return None
    return ScoreEntry(name=name, seconds=seconds)


class ScoreStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = _lock_for(self.path)

    def append(self, name: Optional[str], seconds: int) -> ScoreEntry:
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise TypeError("seconds must be an integer")
        if seconds < 0:
            raise ValueError("seconds must be non-negative")
        entry = ScoreEntry(name=clean_name(name), seconds=seconds)
        record = f"{entry.name},{entry.seconds}\n".encode("utf-8")
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a+b") as f:
                # A hand-edited file may end without a newline; keep its last record intact
                f.seek(0, os.SEEK_END)
                if f.tell() > 0:
                    f.seek(-1, os.SEEK_END)
                    if f.read(1) != b"\n":
                        record = b"\n" + record
                f.write(record)
        logger.info("Saved score %s,%d to %s", entry.name, entry.seconds, self.path)
        return entry

    def entries(self) -> List[ScoreEntry]:
        if not self.path.exists():
            return []
        out: List[ScoreEntry] = []
        with open(self.path, "rb") as f:
            for lineno, raw in enumerate(f, 1):
                try:
                    entry = parse_record(raw.decode("utf-8"))
                except UnicodeDecodeError:
                    entry = None
                if entry is None:
                    logger.debug("Skipping malformed score line %d: %r", lineno, raw)
                    continue
                out.append(entry)
        return out

    def top_n(self, n: int) -> List[ScoreEntry]:
        if n <= 0:
            return []
        # sorted() is stable: ties keep file order
        return sorted(self.entries(), key=lambda e: e.seconds)[:n]
