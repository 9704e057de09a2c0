"""
Asset Loading — Layer 2

LoadingManager : aggregate progress over all tracked requests (loaded / total)
AssetHandle    : single-assignment cell a material or model slot binds to
AssetLoader    : issues fetches on a worker pool; poll() resolves on the main thread

Fetches never block scene composition. Handles only resolve inside poll(),
which the render loop calls once per frame, so every consumer callback runs
on the thread that owns the scene.
"""

import sys
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from PIL import Image


class LoadingManager:
    """Counts started/finished items and reports progress."""

    def __init__(self, on_load: Optional[Callable[[], None]] = None,
                 on_progress: Optional[Callable[[str, int, int], None]] = None,
                 on_error: Optional[Callable[[str], None]] = None):
        self.on_load = on_load
        self.on_progress = on_progress
        self.on_error = on_error
        self.loaded = 0
        self.total = 0
        self.finished = False

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 1.0
        return self.loaded / self.total

    @property
    def is_loading(self) -> bool:
        return self.loaded < self.total

    def item_start(self, url: str) -> None:
        self.total += 1

    def item_end(self, url: str) -> None:
        if self.loaded >= self.total:
            raise RuntimeError(f"item_end: '{url}' ended with nothing outstanding")
        self.loaded += 1
        if self.on_progress is not None:
            self.on_progress(url, self.loaded, self.total)
        if self.loaded == self.total and not self.finished:
            self.finished = True
            if self.on_load is not None:
                self.on_load()

    def item_error(self, url: str) -> None:
        if self.on_error is not None:
            self.on_error(url)


class AssetHandle:
    """A value that arrives later. Assigned exactly once (value or error)."""

    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"

    def __init__(self, url: str, kind: str = "texture"):
        self.url = url
        self.kind = kind
        self.state = self.PENDING
        self.value = None
        self.error: Optional[BaseException] = None
        self._callbacks: List[Callable] = []

    @property
    def ready(self) -> bool:
        return self.state == self.RESOLVED

    def _check_pending(self):
        if self.state != self.PENDING:
            raise RuntimeError(f"AssetHandle '{self.url}' already {self.state}")

    def resolve(self, value) -> None:
        self._check_pending()
        self.state = self.RESOLVED
        self.value = value
        callbacks, self._callbacks = self._callbacks, []
        for cb in callbacks:
            cb(value)

    def fail(self, error: BaseException) -> None:
        self._check_pending()
        self.state = self.FAILED
        self.error = error
        self._callbacks = []

    def then(self, callback: Callable) -> "AssetHandle":
        """Run callback(value) once resolved; dropped if the load fails."""
        if self.state == self.RESOLVED:
            callback(self.value)
        elif self.state == self.PENDING:
            self._callbacks.append(callback)
        return self

    def __repr__(self):
        return f"AssetHandle({self.url!r}, kind={self.kind!r}, state={self.state})"


def read_image(path: Path) -> Image.Image:
    """Decode an image file fully into memory as RGBA."""
    with Image.open(path) as img:
        img.load()
        return img.convert("RGBA")


class AssetLoader:
    """
    Path-addressed asset fetcher.

    `root` prefixes every url. When `manager` is None the loads are untracked
    (no progress reporting), which is how the skybox is fetched.
    """

    DEFAULT_WORKERS = 4

    def __init__(self, root, manager: Optional[LoadingManager] = None,
                 executor: Optional[ThreadPoolExecutor] = None,
                 fetchers: Optional[Dict[str, Callable[[Path], object]]] = None):
        self.root = Path(root)
        self.manager = manager
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=self.DEFAULT_WORKERS, thread_name_prefix="assets")
        self.fetchers: Dict[str, Callable[[Path], object]] = {"texture": read_image}
        if fetchers:
            self.fetchers.update(fetchers)
        self._pending: List[Tuple[Future, AssetHandle]] = []

    def load(self, url: str, kind: str = "texture") -> AssetHandle:
        """Request `url`; returns an unresolved handle immediately."""
        fetch = self.fetchers.get(kind)
        if fetch is None:
            raise ValueError(f"AssetLoader.load: no fetcher registered for kind '{kind}'")
        handle = AssetHandle(url, kind)
        if self.manager is not None:
            self.manager.item_start(url)
        future = self.executor.submit(fetch, self.root / url)
        self._pending.append((future, handle))
        return handle

    @property
    def outstanding(self) -> int:
        return len(self._pending)

    def poll(self) -> int:
        """
        Resolve every finished fetch. Returns the number of handles settled.
        Items leave the pending list one at a time, so if a `then` callback
        raises, the rest of the batch is settled on the next poll.
        """
        done = [item for item in self._pending if item[0].done()]
        for item in done:
            self._pending.remove(item)
            self._settle(*item)
        return len(done)

    def drain(self, timeout: Optional[float] = None) -> None:
        """Block until all outstanding fetches complete, then settle them."""
        while self._pending:
            futures = [f for f, _ in self._pending]
            finished, _ = wait(futures, timeout=timeout, return_when=FIRST_COMPLETED)
            if not finished:
                raise TimeoutError(f"AssetLoader.drain: {len(futures)} fetches still running")
            self.poll()

    def _settle(self, future: Future, handle: AssetHandle) -> None:
        exc = future.exception()
        try:
            if exc is not None:
                print(f"[LOAD] Error loading {handle.kind}: {exc}", file=sys.stderr)
                if self.manager is not None:
                    self.manager.item_error(handle.url)
                handle.fail(exc)
            else:
                handle.resolve(future.result())
        finally:
            if self.manager is not None:
                self.manager.item_end(handle.url)

    def shutdown(self) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=False)
