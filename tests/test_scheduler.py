"""Tests for the concurrent batch scheduler."""
import threading
import time

import pytest

from dxfcross.scheduler import flatten, run_batch


def make_items(n, calls):
    lock = threading.Lock()

    def item(i):
        def run():
            with lock:
                calls.append(i)
            return i * i
        return run

    return [item(i) for i in range(n)]


@pytest.mark.parametrize("concurrency", [1, 2, 3, 7, 10, 25])
def test_every_item_runs_exactly_once(concurrency):
    calls = []
    groups = run_batch(make_items(10, calls), concurrency)
    assert len(groups) == concurrency
    assert sorted(flatten(groups)) == [i * i for i in range(10)]
    assert sorted(calls) == list(range(10))


def test_lazy_generator_is_consumed_once():
    calls = []
    items = (item for item in make_items(50, calls))
    results = flatten(run_batch(items, 4))
    assert len(results) == 50
    assert sorted(calls) == list(range(50))


def test_empty_batch():
    assert flatten(run_batch([], 3)) == []


def test_concurrency_bound_is_respected():
    lock = threading.Lock()
    state = {"active": 0, "peak": 0}

    def item():
        with lock:
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
        time.sleep(0.01)
        with lock:
            state["active"] -= 1
        return True

    results = flatten(run_batch([item] * 20, 3))
    assert len(results) == 20
    assert 1 <= state["peak"] <= 3


def test_results_are_grouped_per_worker():
    groups = run_batch([lambda: 1] * 6, 1)
    assert groups == [[1, 1, 1, 1, 1, 1]]


def test_error_aborts_batch():
    def boom():
        raise RuntimeError("bad entity")

    items = [lambda: 1, lambda: 2, boom, lambda: 4]
    with pytest.raises(RuntimeError, match="bad entity"):
        run_batch(items, 2)


def test_error_stops_remaining_items():
    calls = []

    def boom():
        raise KeyError("missing")

    items = [boom] + make_items(100, calls)
    with pytest.raises(KeyError):
        run_batch(items, 1)
    assert calls == []


def test_invalid_concurrency():
    with pytest.raises(ValueError):
        run_batch([lambda: 1], 0)
