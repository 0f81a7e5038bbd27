from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, Optional, TextIO


class TelemetryLogger:
    """Structured JSONL logger for rover turns.

    Append-only, one JSON object per line. Records written after
    :meth:`close` are dropped.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")
        self.records_written = 0

    def log_turn(self, record: Dict[str, Any]) -> None:
        """Append a single turn record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()
            self.records_written += 1

    @property
    def closed(self) -> bool:
        return self._fp is None

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
