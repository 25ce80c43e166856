import time
from types import SimpleNamespace

from shared.middleware import _duration_since


def test_duration_uses_request_start_time():
    request = SimpleNamespace(state=SimpleNamespace(start_time=time.perf_counter() - 2.0))

    assert _duration_since(request, time.perf_counter()) >= 2.0


def test_duration_falls_back_without_start_time():
    request = SimpleNamespace(state=SimpleNamespace())

    assert _duration_since(request, time.perf_counter() - 1.0) >= 1.0
