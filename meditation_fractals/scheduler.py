"""
Display-synchronized frame scheduling.

FrameScheduler queues "run on the next display refresh" callbacks the
way a browser's requestAnimationFrame does. The host loop calls
run_frame() once per refresh; tests call it directly to single-step.
"""

import itertools
import threading


class FrameScheduler:
    """
    Queue of one-shot callbacks to run on the next display refresh.

    Callbacks requested while a frame is running are deferred to the
    following frame, so a callback that re-requests itself runs exactly
    once per tick.
    """

    def __init__(self):
        self._callbacks = {}
        self._handles = itertools.count(1)
        self._lock = threading.Lock()
        self.frame_count = 0

    def request_frame(self, callback):
        """
        Schedule callback for the next frame.

        Returns:
            Integer handle accepted by cancel_frame()
        """
        with self._lock:
            handle = next(self._handles)
            self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle):
        """Cancel a pending callback. Unknown or already-run handles are ignored."""
        with self._lock:
            self._callbacks.pop(handle, None)

    @property
    def pending(self):
        with self._lock:
            return len(self._callbacks)

    def run_frame(self):
        """
        Run every callback queued before this frame started.

        A callback cancelled by an earlier callback in the same frame
        does not run.

        Returns:
            Number of callbacks that ran
        """
        with self._lock:
            handles = sorted(self._callbacks)
            self.frame_count += 1

        ran = 0
        for handle in handles:
            with self._lock:
                callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue
            callback()
            ran += 1
        return ran
