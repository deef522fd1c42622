"""
Background source code generation.

A runnable captures its own copy of the face and options when it is created,
so the caller may keep editing the live face while the worker generates. The
completion handler is called from inside the worker and has returned before
the worker finishes with the task.
"""

import itertools
import threading
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from .generator import FontSourceCodeGenerator

SourceCodeResult = namedtuple("SourceCodeResult", ["request_id", "source_code", "error", "stale"])
Submission = namedtuple("Submission", ["request_id", "future"])


class SourceCodeRunnable:
    def __init__(self, face, options, format_id, array_name, font_name="Font Data", request_id=0):
        self.face = face.copy()
        self.options = options
        self.format_id = format_id
        self.array_name = array_name
        self.font_name = font_name
        self.request_id = request_id
        self.completion_handler = None

    def set_completion_handler(self, handler):
        self.completion_handler = handler

    def run(self):
        generator = FontSourceCodeGenerator(self.options)
        try:
            source_code = generator.generate(
                self.face, self.format_id, self.array_name, font_name=self.font_name
            )
        except Exception as e:
            self._deliver(SourceCodeResult(self.request_id, None, e, False))
            raise

        self._deliver(SourceCodeResult(self.request_id, source_code, None, False))
        return source_code

    def _deliver(self, result):
        if self.completion_handler is not None:
            self.completion_handler(result)


class SourceCodeRunner:
    """
    Runs generations on a thread pool. Results may complete in any order;
    each carries the id it was submitted with. With latest_only, results older
    than one already delivered are marked stale and not passed to the
    listener.
    """

    def __init__(self, listener=None, max_workers=None, latest_only=True):
        self.listener = listener
        self.latest_only = latest_only
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self._delivery_lock = threading.RLock()
        self._latest_submitted = 0
        self._latest_delivered = 0

    @property
    def latest_request_id(self):
        with self._lock:
            return self._latest_submitted

    def submit(self, face, options, format_id, array_name, font_name="Font Data"):
        with self._lock:
            request_id = next(self._ids)
            self._latest_submitted = request_id

        runnable = SourceCodeRunnable(
            face, options, format_id, array_name, font_name=font_name, request_id=request_id
        )
        runnable.set_completion_handler(self._on_finished)
        return Submission(request_id, self._executor.submit(runnable.run))

    def _on_finished(self, result):
        # deliveries are serialised so a stale result never lands after a newer one
        with self._delivery_lock:
            stale = result.request_id < self._latest_delivered
            if not stale:
                self._latest_delivered = result.request_id
            result = result._replace(stale=stale)
            if self.listener is not None and not (stale and self.latest_only):
                self.listener(result)

    def shutdown(self, wait=True):
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()
