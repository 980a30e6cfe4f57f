class FakeFrames:
    def __init__(self, values, error: BaseException | None = None):
        self._values = list(values)
        self._error = error

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self._values:
            return self._values.pop(0)
        if self._error is not None:
            raise self._error
        raise StopAsyncIteration


class FakeSendValue:
    def __init__(self):
        self.sent = []

    async def __call__(self, value):
        self.sent.append(value)


class FakeSession:
    """Echoes every request, optionally rewriting the values listed in `rewrite`."""

    def __init__(self, rewrite=None):
        self.requests = []
        self._rewrite = rewrite or {}

    async def request(self, value):
        self.requests.append(value)
        for original, replacement in self._rewrite.items():
            if value == original and type(value) is type(original):
                return replacement
        return value
