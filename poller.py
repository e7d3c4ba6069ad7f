import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 5 * 60


class Poller:
    """Re-runs ``fetch_fn`` on a fixed interval.

    Every tick starts a fresh fetch thread whether or not the previous one has
    finished. Results are numbered by start order and a result is kept only if
    no newer poll has published already, so the latest poll wins. The UI loop
    collects results with ``take_latest``.
    """

    def __init__(self, fetch_fn: Callable[[], list], interval_seconds: float = DEFAULT_INTERVAL_SECONDS):
        self.fetch_fn = fetch_fn
        self.interval_seconds = interval_seconds
        self.last_error: Optional[str] = None

        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._timer: Optional[threading.Thread] = None
        self._seq = 0
        self._published_seq = 0
        self._latest = None
        self._has_latest = False

    @property
    def running(self) -> bool:
        return self._timer is not None and self._timer.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._timer = threading.Thread(target=self._loop, daemon=True)
        self._timer.start()

    def stop(self):
        self._stop.set()
        self._timer = None

    def poll_now(self) -> threading.Thread:
        with self._lock:
            self._seq += 1
            seq = self._seq
        t = threading.Thread(target=self._fetch, args=(seq,), daemon=True)
        t.start()
        return t

    def take_latest(self):
        with self._lock:
            if not self._has_latest:
                return None
            rows = self._latest
            self._latest = None
            self._has_latest = False
            return rows

    def _loop(self):
        while not self._stop.is_set():
            self.poll_now()
            if self._stop.wait(self.interval_seconds):
                break

    def _fetch(self, seq: int):
        try:
            rows = self.fetch_fn()
        except Exception as exc:
            logger.warning("Poll %d failed: %s", seq, exc)
            with self._lock:
                if seq > self._published_seq:
                    self.last_error = str(exc) or exc.__class__.__name__
            return
        self._publish(seq, rows)

    def _publish(self, seq: int, rows):
        with self._lock:
            if seq < self._published_seq:
                logger.debug("Dropping stale poll %d (have %d)", seq, self._published_seq)
                return
            self._published_seq = seq
            self._latest = rows
            self._has_latest = True
            self.last_error = None
