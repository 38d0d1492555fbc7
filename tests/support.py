import asyncio


class RecordingLoop:
    """Stands in for the reactor: records timers instead of running them."""

    def __init__(self):
        self._loop = asyncio.new_event_loop()
        self.timers = []

    def create_future(self):
        return self._loop.create_future()

    def call_later(self, delay, callback):
        self.timers.append((delay, callback))

    def close(self):
        self._loop.close()
