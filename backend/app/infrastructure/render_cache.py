"""Render Cache — memoized read responses keyed by logical path, dropped on invalidation.

Invariants:
    - Entries are grouped by logical path ("/dashboard/invoices"); revalidate_path drops the group
    - revalidate_path never fails, even for a path with nothing cached (one-way signal)
    - A render computed before a revalidation is never stored after it: readers capture
      generation(path) before querying and put() discards values from an older generation
    - Each path holds at most max_entries; the oldest entry is evicted first
    - Disabled cache never stores and never returns hits

Design Decisions:
    - In-process dict: single-process uvicorn, a missed invalidation in another worker
      only means a stale page until its next write (ADR: demo deployment)
    - Satisfies core PathInvalidator structurally, so the mutation pipeline never imports it
"""

import logging
from typing import Any, Hashable

logger = logging.getLogger(__name__)


class RenderCache:
    """Path-scoped response cache with explicit invalidation."""

    def __init__(self, max_entries: int = 256, enabled: bool = True):
        self._entries: dict[str, dict[Hashable, Any]] = {}
        self._generations: dict[str, int] = {}
        self._max_entries = max_entries
        self.enabled = enabled

    def configure(self, max_entries: int, enabled: bool) -> None:
        self._max_entries = max_entries
        self.enabled = enabled
        if not enabled:
            self._entries.clear()

    def get(self, path: str, key: Hashable) -> Any | None:
        if not self.enabled:
            return None
        return self._entries.get(path, {}).get(key)

    def generation(self, path: str) -> int:
        """Invalidation counter for path; pass it back to put() with the render."""
        return self._generations.get(path, 0)

    def put(self, path: str, key: Hashable, value: Any, generation: int) -> bool:
        """Store value unless path was revalidated since generation was read."""
        if not self.enabled:
            return False
        if generation != self.generation(path):
            logger.debug(
                f"Discarded stale render for {path}", extra={"path": path},
            )
            return False
        bucket = self._entries.setdefault(path, {})
        bucket.pop(key, None)
        bucket[key] = value
        while len(bucket) > self._max_entries:
            bucket.pop(next(iter(bucket)))
        return True

    def revalidate_path(self, path: str) -> None:
        self._generations[path] = self.generation(path) + 1
        dropped = self._entries.pop(path, None)
        if dropped:
            logger.info(
                f"Revalidated {path}: {len(dropped)} cached render(s) dropped",
                extra={"path": path},
            )

    def size(self, path: str) -> int:
        return len(self._entries.get(path, {}))


render_cache = RenderCache()
