import asyncio

import pytest

from kalima.services.search_debouncer import SearchDebouncer


class Recorder:
    def __init__(self, delays=None):
        self.delays = delays or {}
        self.evaluated = []
        self.delivered = []
        self.errors = []

    async def evaluate(self, text):
        self.evaluated.append(text)
        await asyncio.sleep(self.delays.get(text, 0))
        if text == "boom":
            raise RuntimeError("store down")
        return f"results for {text}"

    def on_result(self, text, result):
        self.delivered.append((text, result))

    async def on_error(self, text, error):
        self.errors.append((text, str(error)))


@pytest.mark.asyncio
async def test_keystrokes_inside_quiet_interval_collapse_to_last():
    recorder = Recorder()
    debouncer = SearchDebouncer(recorder.evaluate, recorder.on_result, quiet_interval=0.3)

    debouncer.submit("ca")
    await asyncio.sleep(0.1)
    debouncer.submit("cat")
    await debouncer.drain()

    assert recorder.evaluated == ["cat"]
    assert recorder.delivered == [("cat", "results for cat")]


@pytest.mark.asyncio
async def test_slow_stale_result_is_discarded():
    recorder = Recorder(delays={"ca": 0.2})
    debouncer = SearchDebouncer(recorder.evaluate, recorder.on_result, quiet_interval=0.01)

    debouncer.submit("ca")
    await asyncio.sleep(0.05)  # "ca" is now evaluating
    debouncer.submit("cat")
    await debouncer.drain()

    assert recorder.evaluated == ["ca", "cat"]
    assert recorder.delivered == [("cat", "results for cat")]


@pytest.mark.asyncio
async def test_generations_increase():
    recorder = Recorder()
    debouncer = SearchDebouncer(recorder.evaluate, recorder.on_result, quiet_interval=0.01)

    first = debouncer.submit("ab")
    second = debouncer.submit("abc")
    await debouncer.drain()

    assert second == first + 1 == debouncer.latest_generation


@pytest.mark.asyncio
async def test_error_of_latest_query_is_reported():
    recorder = Recorder()
    debouncer = SearchDebouncer(
        recorder.evaluate, recorder.on_result, on_error=recorder.on_error, quiet_interval=0.01)

    debouncer.submit("boom")
    await debouncer.drain()

    assert recorder.errors == [("boom", "store down")]
    assert recorder.delivered == []


@pytest.mark.asyncio
async def test_error_of_stale_query_is_dropped():
    recorder = Recorder(delays={"boom": 0.1})
    debouncer = SearchDebouncer(
        recorder.evaluate, recorder.on_result, on_error=recorder.on_error, quiet_interval=0.01)

    debouncer.submit("boom")
    await asyncio.sleep(0.05)
    debouncer.submit("cat")
    await debouncer.drain()

    assert recorder.errors == []
    assert recorder.delivered == [("cat", "results for cat")]


@pytest.mark.asyncio
async def test_aclose_drops_pending_search():
    recorder = Recorder()
    debouncer = SearchDebouncer(recorder.evaluate, recorder.on_result, quiet_interval=0.3)

    debouncer.submit("cat")
    await debouncer.aclose()

    assert recorder.evaluated == []
    assert recorder.delivered == []
