import random
from collections import Counter

import pytest

from algorithms import ARRAY, Outcome, list_algorithms
from algorithms.bubble_sort import bubble_sort
from algorithms.insertion_sort import insertion_sort
from algorithms.merge_sort import merge_sort
from algorithms.quick_sort import quick_sort
from algorithms.selection_sort import selection_sort
from engine.token import CancellationToken
from model import ArrayModel

SORT_KEYS = [a.key for a in list_algorithms(ARRAY)]


def drain(gen, model=None):
    """Exhaust a step generator; optionally snapshot the model after every step."""
    frames = []
    for _ in gen:
        if model is not None:
            frames.append(model.snapshot())
    return frames


@pytest.mark.parametrize("key", SORT_KEYS)
@pytest.mark.parametrize("values", [
    [50, 20, 40, 10, 30],
    [10, 20, 30, 40, 50],
    [50, 40, 30, 20, 10],
    [30, 30, 10, 30, 10, 20],
    [42],
])
def test_final_array_is_sorted_permutation(controller, key, values):
    controller.load_array(values)
    outcome = controller.start(key, speed=10, block=True)

    final = controller.store.latest
    assert outcome is Outcome.COMPLETED
    assert list(final.values) == sorted(values)
    assert Counter(final.values) == Counter(values)
    assert all(bar.sorted for bar in final.bars)
    assert not any(bar.compared or bar.swapped for bar in final.bars)


@pytest.mark.parametrize("key", SORT_KEYS)
def test_random_arrays_sort(controller, key):
    rng = random.Random(7)
    for _ in range(5):
        values = [rng.randrange(10, 300) for _ in range(rng.randint(5, 25))]
        controller.load_array(values)
        controller.start(key, speed=10, block=True)
        assert list(controller.store.latest.values) == sorted(values)


@pytest.mark.parametrize("key", SORT_KEYS)
def test_sorted_flags_never_cleared_during_run(controller, key):
    controller.load_array([90, 15, 60, 33, 72, 18, 45])
    controller.start(key, speed=10, block=True)

    snaps = controller.recorder.snapshots
    assert snaps
    for prev, cur in zip(snaps, snaps[1:]):
        for before, after in zip(prev.bars, cur.bars):
            if before.sorted:
                assert after.sorted


@pytest.mark.parametrize("key", SORT_KEYS)
def test_step_numbers_increase(controller, key):
    controller.load_array([70, 20, 50, 10])
    controller.start(key, speed=10, block=True)

    numbers = [s.step_number for s in controller.recorder.snapshots]
    assert numbers == list(range(len(numbers)))


def test_insertion_sort_every_frame_is_permutation():
    values = [80, 30, 60, 10, 50, 20]
    model = ArrayModel(values)
    for frame in drain(insertion_sort(model, CancellationToken()), model):
        assert Counter(frame.values) == Counter(values)


def test_bubble_sort_marks_tail_after_each_pass():
    model = ArrayModel([40, 30, 20, 10])
    token = CancellationToken()
    frames = drain(bubble_sort(model, token), model)

    pass_ends = [f for f in frames if f.explanation.startswith("Pass")]
    assert [sum(b.sorted for b in f.bars) for f in pass_ends] == [1, 2, 3]
    # index 0 only after the final pass
    assert not pass_ends[-1].bars[0].sorted
    assert frames[-1].bars[0].sorted


def test_selection_sort_skips_swap_when_minimum_in_place():
    model = ArrayModel([10, 20, 30, 40])
    frames = drain(selection_sort(model, CancellationToken()), model)
    assert not any(bar.swapped for frame in frames for bar in frame.bars)


@pytest.mark.parametrize("key", SORT_KEYS)
def test_cancelled_token_ends_generator(key):
    info = next(a for a in list_algorithms(ARRAY) if a.key == key)
    model = ArrayModel([60, 50, 40, 30, 20, 10])
    token = CancellationToken()
    gen = info.fn(model, token)

    for _ in range(3):
        next(gen)
    token.cancel()
    leftover = list(gen)

    # at most the step already in flight finishes
    assert len(leftover) <= 2
    assert not all(bar.sorted for bar in model.snapshot().bars)


def explanations(gen):
    return [step.explanation for step in gen if step.explanation]


def test_quick_sort_publishes_pivot_placement_in_place():
    model = ArrayModel([10, 20, 30])
    notes = explanations(quick_sort(model, CancellationToken()))
    placed = [n for n in notes if n.startswith("Place pivot")]
    assert placed == ["Place pivot 30 at index 2.", "Place pivot 20 at index 1."]


def test_merge_takes_left_element_on_ties():
    # halves [20, 30] and [20, 25]: the tied 20 must come from the left,
    # so the next comparison is 30 against the right-hand 20
    model = ArrayModel([20, 30, 20, 25])
    notes = explanations(merge_sort(model, CancellationToken()))
    assert "Fill index 0: 20 vs 20." in notes
    assert notes[notes.index("Fill index 0: 20 vs 20.") + 1] == "Fill index 1: 30 vs 20."
    assert list(model.snapshot().values) == [20, 20, 25, 30]
