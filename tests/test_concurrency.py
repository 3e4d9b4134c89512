"""Tests for the indexed task runner."""

from __future__ import annotations

import threading
from contextvars import ContextVar

import pytest

from resglob.concurrency import run_indexed_tasks_fail_fast


def test_results_are_ordered_by_index():
    tasks = [(i, lambda i=i: i * i) for i in (2, 0, 1)]
    assert run_indexed_tasks_fail_fast(tasks, max_workers=3) == [(0, 0), (1, 1), (2, 4)]


def test_sequential_when_single_worker():
    thread_ids: list[int] = []

    def task() -> None:
        thread_ids.append(threading.get_ident())

    run_indexed_tasks_fail_fast([(0, task), (1, task)], max_workers=1)
    assert thread_ids == [threading.get_ident(), threading.get_ident()]


def test_empty_tasks():
    assert run_indexed_tasks_fail_fast([], max_workers=4) == []


def test_failure_propagates():
    def boom() -> int:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        run_indexed_tasks_fail_fast([(0, lambda: 1), (1, boom)], max_workers=2)


def test_tasks_see_caller_context():
    label: ContextVar[str] = ContextVar("label", default="unset")
    label.set("caller")
    tasks = [(i, label.get) for i in range(3)]
    assert run_indexed_tasks_fail_fast(tasks, max_workers=3) == [
        (0, "caller"),
        (1, "caller"),
        (2, "caller"),
    ]
