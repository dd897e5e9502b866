import contextvars
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from fractions import Fraction
from types import SimpleNamespace

import pytest

from server_timing import (
    RequestTimer,
    ResolvedTimingConfig,
    TimeUnit,
    TimingEntry,
    attach_timings,
    begin_request,
    capture_timing,
    end_request,
    init_options,
    timing,
)
from server_timing.timing import current_timer


def make_response(**headers):
    return SimpleNamespace(headers=dict(headers))


@pytest.fixture
def enabled_timer() -> RequestTimer:
    return RequestTimer(
        ResolvedTimingConfig(header_unit=TimeUnit.MILLISECOND, enabled=True)
    )


@pytest.fixture
def request_context():
    timer, token = begin_request(init_options())
    yield timer
    end_request(token)


def test_capture_without_request_is_a_noop():
    assert current_timer() is None
    assert capture_timing("orphan", 1_000) is True
    assert current_timer() is None


def test_attach_without_request_returns_response_unchanged():
    response = make_response()
    assert attach_timings(response) is response
    assert response.headers == {}


def test_timing_block_without_request_still_runs():
    ran = []
    with timing("orphan"):
        ran.append(True)
    assert ran == [True]


def test_begin_request_installs_fresh_timer(request_context):
    assert current_timer() is request_context
    assert request_context.entries == []
    assert request_context.config.header_unit is TimeUnit.MILLISECOND


def test_end_request_removes_timer():
    timer, token = begin_request(init_options())
    end_request(token)

    assert current_timer() is None
    assert capture_timing("late", 1) is True
    assert timer.entries == []


def test_capture_records_in_call_order(request_context):
    capture_timing("a", (1, TimeUnit.SECOND))
    capture_timing("b", 10)
    capture_timing("c", (2, "microsecond"), "third")

    assert request_context.entries == [
        TimingEntry("a", 1, TimeUnit.SECOND),
        TimingEntry("b", 10, TimeUnit.NATIVE),
        TimingEntry("c", 2, TimeUnit.MICROSECOND, "third"),
    ]


def test_capture_with_unknown_unit_is_discarded(request_context):
    assert capture_timing("bad", (1, "fortnight")) is True
    assert capture_timing("worse", (1, "second", "extra")) is True
    assert request_context.entries == []


@pytest.mark.parametrize(
    "duration",
    [
        True,
        (False, "millisecond"),
        "12",
        ("12", "millisecond"),
        None,
        float("nan"),
        (float("inf"), "second"),
        (float("-inf"), "second"),
        Decimal("NaN"),
        (Decimal("Infinity"), "millisecond"),
    ],
)
def test_capture_with_invalid_duration_is_discarded(request_context, duration):
    assert capture_timing("bad", duration) is True
    assert request_context.entries == []


def test_capture_converts_fraction_exactly(request_context):
    capture_timing("third", (Fraction(1, 4), "millisecond"))
    capture_timing("half", Fraction(1, 2))

    assert request_context.entries == [
        TimingEntry("third", Decimal("0.25"), TimeUnit.MILLISECOND),
        TimingEntry("half", Decimal("0.5"), TimeUnit.NATIVE),
    ]
    assert request_context.format_server_timing() == "third;dur=0.25, half;dur=0.0000005"


def test_capture_keeps_finite_decimals(request_context):
    capture_timing("exact", (Decimal("1.25"), "millisecond"))

    assert request_context.format_server_timing() == "exact;dur=1.25"


def test_capture_is_ignored_when_disabled():
    timer, token = begin_request(init_options(enabled=False))
    try:
        assert capture_timing("skipped", (1, "second")) is True
        with timing("also-skipped"):
            pass
    finally:
        end_request(token)

    assert timer.entries == []


def test_timing_block_records_native_duration(request_context):
    with timing("block", "Timed block"):
        pass

    [entry] = request_context.entries
    assert entry.name == "block"
    assert entry.unit is TimeUnit.NATIVE
    assert entry.description == "Timed block"
    assert entry.duration >= 0


def test_timing_block_records_even_when_body_raises(request_context):
    with pytest.raises(ValueError):
        with timing("failing"):
            raise ValueError("boom")

    assert [e.name for e in request_context.entries] == ["failing"]


def test_attach_sets_header(enabled_timer):
    enabled_timer.record(TimingEntry("db", 5, TimeUnit.MILLISECOND))
    enabled_timer.record(TimingEntry("db", 7, TimeUnit.MILLISECOND, "retry"))

    response = enabled_timer.attach_timings(make_response())

    assert response.headers == {"Server-Timing": 'db;dur=5, db;desc="retry";dur=7'}


def test_attach_overwrites_previous_value(enabled_timer):
    enabled_timer.record(TimingEntry("db", 5, TimeUnit.MILLISECOND))

    response = enabled_timer.attach_timings(make_response(**{"Server-Timing": "old"}))

    assert response.headers["Server-Timing"] == "db;dur=5"


def test_attach_leaves_response_alone_when_disabled():
    timer = RequestTimer(
        ResolvedTimingConfig(header_unit=TimeUnit.MILLISECOND, enabled=False)
    )
    timer.record(TimingEntry("db", 5, TimeUnit.MILLISECOND))

    response = timer.attach_timings(make_response())

    assert response.headers == {}


def test_separate_contexts_are_isolated():
    def handle(name):
        timer, token = begin_request(init_options())
        capture_timing(name, (1, "millisecond"))
        header = timer.format_server_timing()
        end_request(token)
        return header

    first = contextvars.copy_context().run(handle, "first")
    second = contextvars.copy_context().run(handle, "second")

    assert first == "first;dur=1"
    assert second == "second;dur=1"


def test_threads_sharing_a_request_context_all_record(request_context):
    def work(i):
        return capture_timing(f"step-{i}", (i, "millisecond"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [
            pool.submit(contextvars.copy_context().run, work, i) for i in range(200)
        ]
        assert all(f.result() for f in futures)

    assert len(request_context.entries) == 200
