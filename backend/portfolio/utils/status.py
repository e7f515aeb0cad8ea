import time


class StatusMessage:
    """
    Inline status line that clears itself ``ttl`` seconds after being shown.
    """

    def __init__(self, ttl=3.0, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._text = None
        self._is_error = False
        self._shown_at = 0.0

    def show(self, text, error=False):
        self._text = text
        self._is_error = error
        self._shown_at = self._clock()

    def clear(self):
        self._text = None

    @property
    def text(self):
        if self._text is not None and self._clock() - self._shown_at >= self.ttl:
            self._text = None
        return self._text

    @property
    def is_error(self):
        return self.text is not None and self._is_error

    def to_dict(self):
        text = self.text
        if text is None:
            return None
        return {"text": text, "error": self._is_error}
