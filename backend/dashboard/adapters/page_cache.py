import threading
from typing import Any, Dict, Optional

from dashboard.utils.log import get_logger

log = get_logger("page_cache")


class PageCache:
    """
    In-process cache of rendered pages keyed by path (plus query string).
    Mutations call revalidate_path() so the next read recomputes the page.
    """

    def __init__(self):
        self._pages: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self.revalidations: Dict[str, int] = {}

    @staticmethod
    def key_for(path: str, query: str = "") -> str:
        return f"{path}?{query}" if query else path

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._pages.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._pages[key] = value

    def revalidate_path(self, path: str) -> int:
        """Drop `path` and all of its query variants. Returns the number of entries dropped."""
        with self._lock:
            stale = [k for k in self._pages if k == path or k.startswith(path + "?")]
            for k in stale:
                del self._pages[k]
            self.revalidations[path] = self.revalidations.get(path, 0) + 1
        log.debug(f"revalidate_path(): path={path!r} dropped={len(stale)}")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()
            self.revalidations.clear()


page_cache = PageCache()


def get_page_cache() -> PageCache:
    return page_cache
