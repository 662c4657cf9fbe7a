import sys
import threading

CLEAR_LINE = "\r\033[2K"


class ProgressDots:
    """Print a dot every `interval` seconds while a long task runs.

    Only writes to interactive streams. Call stop() before printing results:
    it joins the thread and clears the dots from the line.
    """

    def __init__(self, stream=None, interval=0.1):
        self.stream = stream or sys.stderr
        self.interval = interval
        self._stopped = threading.Event()
        self._thread = None

    @property
    def enabled(self):
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def start(self):
        if not self.enabled or self._thread is not None:
            return self
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="progress-dots", daemon=True)
        self._thread.start()
        return self

    def _run(self):
        while not self._stopped.wait(self.interval):
            self.stream.write(".")
            self.stream.flush()

    def stop(self):
        if self._thread is None:
            return
        self._stopped.set()
        self._thread.join()
        self._thread = None
        self.stream.write(CLEAR_LINE)
        self.stream.flush()

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
