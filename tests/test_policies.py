"""Tests for the per-run policy bookkeeping.

Each policy object is exercised directly, the way the engine drives it:
``on_insert`` when a page is loaded, ``on_hit`` on a hit and
``select_victim`` when every frame is occupied.
"""

import random

import pytest

import inspect

from engine import POLICY_CLASSES, ReplacementPolicy, make_policy_state, simulate
from policies import (
    ClockState,
    FIFOState,
    LFUState,
    LRUState,
    OptimalState,
    PolicyState,
    RandomState,
)


def _load(state, pages):
    for page in pages:
        state.on_insert(page)
    return list(pages)


# -- Registry -----------------------------------------------------------------


class TestRegistry:
    """Every policy tag maps to its own state class."""

    def test_every_policy_registered(self) -> None:
        assert set(POLICY_CLASSES) == set(ReplacementPolicy)

    @pytest.mark.parametrize("policy", list(ReplacementPolicy))
    def test_make_policy_state_is_fresh(self, policy) -> None:
        a = make_policy_state(policy)
        b = make_policy_state(policy)
        assert isinstance(a, PolicyState)
        assert isinstance(a, POLICY_CLASSES[policy])
        assert a is not b

    def test_base_state_has_no_victim(self) -> None:
        with pytest.raises(NotImplementedError):
            PolicyState().select_victim([1], 0)


# -- FIFO ---------------------------------------------------------------------


class TestFIFOState:
    """FIFO evicts in arrival order."""

    def test_selects_oldest_page(self) -> None:
        state = FIFOState()
        frames = _load(state, [3, 1, 2])
        assert state.select_victim(frames, 0) == 0
        assert state.snapshot() == {"queue": [1, 2]}

    def test_hit_does_not_change_order(self) -> None:
        state = FIFOState()
        frames = _load(state, [3, 1, 2])
        state.on_hit(3)
        assert frames[state.select_victim(frames, 0)] == 3


# -- LRU ----------------------------------------------------------------------


class TestLRUState:
    """LRU evicts from the least recently used end of the stack."""

    def test_stack_is_most_recent_first(self) -> None:
        state = LRUState()
        _load(state, [1, 2, 3])
        assert state.snapshot() == {"stack": [3, 2, 1]}

    def test_hit_moves_page_to_front(self) -> None:
        state = LRUState()
        frames = _load(state, [1, 2, 3])
        state.on_hit(1)
        assert state.snapshot() == {"stack": [1, 3, 2]}
        assert frames[state.select_victim(frames, 0)] == 2
        assert state.snapshot() == {"stack": [1, 3]}


# -- LFU ----------------------------------------------------------------------


class TestLFUState:
    """LFU evicts the least used page, lowest frame first on ties."""

    def test_counts(self) -> None:
        state = LFUState()
        _load(state, [4, 5])
        state.on_hit(4)
        state.on_hit(4)
        assert state.snapshot() == {"frequency": {4: 3, 5: 1}}

    def test_tie_goes_to_lowest_slot(self) -> None:
        state = LFUState()
        frames = _load(state, [8, 6, 7])
        state.on_hit(8)
        # 6 and 7 tie at 1; 6 sits in the lower frame
        assert state.select_victim(frames, 0) == 1
        assert 6 not in state.snapshot()["frequency"]

    def test_untracked_page_counts_as_zero(self) -> None:
        state = LFUState()
        state.on_insert(1)
        assert state.select_victim([1, 2], 0) == 1


# -- CLOCK --------------------------------------------------------------------


class TestClockState:
    """Second chance skips pages whose reference bit is set."""

    def test_insert_clears_bit(self) -> None:
        state = ClockState()
        _load(state, [1, 2])
        assert state.snapshot() == {
            "queue": [1, 2],
            "reference_bits": {1: False, 2: False},
            "scan_lengths": [],
        }

    def test_second_chance(self) -> None:
        state = ClockState()
        frames = _load(state, [1, 2, 3])
        state.on_hit(1)
        assert frames[state.select_victim(frames, 0)] == 2
        assert state.last_scan_length == 2
        assert state.snapshot() == {
            "queue": [3, 1],
            "reference_bits": {3: False, 1: False},
            "scan_lengths": [2],
        }

    def test_all_bits_set(self) -> None:
        state = ClockState()
        frames = _load(state, [1, 2, 3])
        for page in frames:
            state.on_hit(page)
        assert frames[state.select_victim(frames, 0)] == 1
        assert state.last_scan_length == 4

    @pytest.mark.parametrize("frame_count", [1, 2, 3, 5, 8])
    def test_scan_is_bounded(self, frame_count) -> None:
        """Every eviction inspects at most 2 * frame_count pages."""
        rng = random.Random(frame_count)
        refs = [rng.randrange(frame_count + 3) for _ in range(300)]
        scans = simulate("CLOCK", frame_count, refs).policy_state["scan_lengths"]

        assert scans
        assert max(scans) <= 2 * frame_count


# -- OPTIMAL / RANDOM ---------------------------------------------------------


class TestOptimalState:
    """OPTIMAL looks ahead in the unprocessed references."""

    def test_later_reuse_is_evicted(self) -> None:
        refs = [1, 2, 3, 1, 2]
        state = OptimalState(refs)
        # Both pages recur; 2 recurs later
        assert state.select_victim([1, 2], 2) == 1

    def test_first_unused_page_wins(self) -> None:
        refs = [1, 2, 3, 4, 1]
        state = OptimalState(refs)
        # 2 and 3 never occur again; 2 is found first
        assert state.select_victim([1, 2, 3], 3) == 1

    def test_farthest_next_use(self) -> None:
        refs = [5, 6, 7, 6, 5]
        state = OptimalState(refs)
        assert state.select_victim([5, 6], 2) == 0

    def test_no_bookkeeping(self) -> None:
        state = OptimalState([1, 2])
        state.on_insert(1)
        state.on_hit(1)
        assert state.snapshot() == {}


class TestRandomState:
    """RANDOM draws a frame index from the injected generator."""

    def test_uses_generator(self) -> None:
        state = RandomState(rng=random.Random(17))
        expected = random.Random(17).randrange(4)
        assert state.select_victim([1, 2, 3, 4], 0) == expected

    def test_index_in_range(self) -> None:
        state = RandomState(rng=random.Random(0))
        for _ in range(100):
            assert 0 <= state.select_victim([1, 2, 3], 0) < 3

    def test_default_generator(self) -> None:
        """Without an injected generator a private one is used."""
        for state in (RandomState(), make_policy_state("RANDOM")):
            assert isinstance(state.rng, random.Random)
            assert 0 <= state.select_victim([1, 2], 0) < 2

    def test_default_generators_are_private(self) -> None:
        a, b = RandomState(), RandomState()
        assert a.rng is not b.rng


# -- Interface ----------------------------------------------------------------


@pytest.mark.parametrize("cls", list(POLICY_CLASSES.values()))
@pytest.mark.parametrize("method", ["on_hit", "on_insert", "select_victim", "snapshot"])
def test_overrides_keep_annotations(cls, method) -> None:
    """Every policy method carries the same annotations as PolicyState's."""
    expected = inspect.signature(getattr(PolicyState, method))
    actual = inspect.signature(getattr(cls, method))
    assert [p.annotation for p in actual.parameters.values()] == \
        [p.annotation for p in expected.parameters.values()]
    assert actual.return_annotation == expected.return_annotation
