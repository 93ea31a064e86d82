import json
import threading
from typing import Any, List, Mapping


def _dumps(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


class BulkBuffer:
    """Thread-safe accumulator for the newline-delimited _bulk payload."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._chunks: List[str] = []
        self._pairs = 0

    def append(self, header: Mapping[str, Any], document: Mapping[str, Any]) -> None:
        # Serialize outside the lock; only the list mutation is guarded.
        chunk = f"{_dumps(header)}\n{_dumps(document)}\n"
        with self._lock:
            self._chunks.append(chunk)
            self._pairs += 1

    def drain_and_reset(self) -> str:
        with self._lock:
            chunks = self._chunks
            self._chunks = []
            self._pairs = 0
        return "".join(chunks)

    @property
    def pending_pairs(self) -> int:
        with self._lock:
            return self._pairs

    def __len__(self) -> int:
        with self._lock:
            return sum(len(chunk) for chunk in self._chunks)
