"""Offline stand-ins for the random-number endpoint."""
import requests

from rpsls.config import RandomSourceSettings

TEST_SETTINGS = RandomSourceSettings(
    api_url="http://random.test/api/random",
    timeout_seconds=1.5,
    max_retries=3,
    retry_delay_seconds=0.0,
    fallback_max=100,
)


class FakeResponse:
    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if not 200 <= self.status_code < 300:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeSession:
    """Replays ``outcomes`` in order; the last one repeats once exhausted.

    An outcome is either a ``FakeResponse`` or an exception instance to raise.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        item = self.outcomes[min(len(self.calls), len(self.outcomes)) - 1]
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


def number(value):
    return FakeResponse({"random_number": value})


def refused():
    return requests.ConnectionError("[Errno 111] Connection refused")


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class SlowSession(FakeSession):
    """FakeSession where every GET takes ``seconds`` on ``clock``."""

    def __init__(self, clock, seconds, *outcomes):
        super().__init__(*outcomes)
        self.clock = clock
        self.seconds = seconds

    def get(self, url, timeout=None):
        self.clock.advance(self.seconds)
        return super().get(url, timeout=timeout)
