# engine.py
"""
Page Replacement Simulation Engine

Replays a page reference sequence against a fixed number of frames under one
replacement policy and records what happened at every reference:

    - the frame contents once the reference is resolved
    - whether it was a hit or a page fault
    - which resident page (if any) was evicted

Supported policies: FIFO, LRU, LFU, OPTIMAL, CLOCK (second chance), RANDOM.

The engine is a pure function of its inputs. RANDOM draws from a
``random.Random`` passed in by the caller so runs can be reproduced.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import random
from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from errors import InvalidFrameCount, InvalidReference, PolicyNotRecognized
from policies import (
    ClockState,
    FIFOState,
    LFUState,
    LRUState,
    OptimalState,
    PolicyState,
    RandomState,
)


# =============================================================================
# DATA MODEL
# =============================================================================

class ReplacementPolicy(str, Enum):
    """
    Enumeration of available page replacement algorithms.

    FIFO:    First-In-First-Out - replaces the oldest page in memory
    LRU:     Least Recently Used - replaces the page not used for longest time
    LFU:     Least Frequently Used - replaces the page with the fewest hits
    OPTIMAL: replaces the page whose next use is farthest in the future
    CLOCK:   Second chance - FIFO that spares pages with the reference bit set
    RANDOM:  replaces a randomly chosen frame
    """
    FIFO = "FIFO"
    LRU = "LRU"
    LFU = "LFU"
    OPTIMAL = "OPTIMAL"
    CLOCK = "CLOCK"
    RANDOM = "RANDOM"

    @classmethod
    def parse(cls, tag) -> "ReplacementPolicy":
        """
        Resolve a policy tag to a member.

        Args:
            tag: A ReplacementPolicy member or its name (case-insensitive)

        Returns:
            ReplacementPolicy: The matching policy

        Raises:
            PolicyNotRecognized: If the tag names no known policy
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            try:
                return cls(tag.strip().upper())
            except ValueError:
                pass
        raise PolicyNotRecognized(tag)


# Policy dispatch: one state class per policy, all sharing PolicyState's interface
POLICY_CLASSES = {
    ReplacementPolicy.FIFO: FIFOState,
    ReplacementPolicy.LRU: LRUState,
    ReplacementPolicy.LFU: LFUState,
    ReplacementPolicy.OPTIMAL: OptimalState,
    ReplacementPolicy.CLOCK: ClockState,
    ReplacementPolicy.RANDOM: RandomState,
}


@dataclass(frozen=True)
class Step:
    """
    One resolved page reference.

    Attributes:
        index (int): Position of the reference in the sequence
        page (int): The referenced page
        frames (Tuple[Optional[int], ...]): Frame contents after the reference,
            None marking an empty frame
        fault (bool): True if the page was not resident
        frame (int): Frame now holding the page
        replaced (Optional[int]): Page evicted to make room, None if no eviction
    """
    index: int
    page: int
    frames: Tuple[Optional[int], ...]
    fault: bool
    frame: int
    replaced: Optional[int] = None

    @property
    def hit(self) -> bool:
        return not self.fault


@dataclass(frozen=True)
class SimulationResult:
    """
    Complete, immutable trace of one simulation run.

    Attributes:
        policy (ReplacementPolicy): Policy used for the run
        frame_count (int): Number of frames
        references (Tuple[int, ...]): The reference sequence
        history (Tuple[Step, ...]): One Step per reference, in order
        faults (int): Number of page faults
        hits (int): Number of hits (len(references) - faults)
        events (Tuple[str, ...]): Event log of hits, faults, evictions and loads
        policy_state (Dict): The policy's bookkeeping at the end of the run,
            as returned by its snapshot()
    """
    policy: ReplacementPolicy
    frame_count: int
    references: Tuple[int, ...]
    history: Tuple[Step, ...]
    faults: int
    hits: int
    events: Tuple[str, ...] = field(default=(), repr=False)
    policy_state: Dict = field(default_factory=dict, repr=False)

    @property
    def total_refs(self) -> int:
        return len(self.references)

    @property
    def hit_ratio(self) -> float:
        return (self.hits / self.total_refs) if self.total_refs > 0 else 0.0

    @property
    def fault_rate(self) -> float:
        return (self.faults / self.total_refs) if self.total_refs > 0 else 0.0

    def get_stats(self) -> Dict[str, float]:
        """
        Calculate and return simulation statistics.

        Returns:
            Dict[str, float]: Statistics including:
                - hits: Total page hits
                - faults: Total page faults
                - hit_ratio: Hits / Total accesses
                - fault_rate: Faults / Total accesses
                - total_refs: Total memory references
        """
        return {
            "hits": self.hits,
            "faults": self.faults,
            "hit_ratio": round(self.hit_ratio, 4),
            "fault_rate": round(self.fault_rate, 4),
            "total_refs": self.total_refs,
        }


# =============================================================================
# INPUT VALIDATION
# =============================================================================

def _is_int(value) -> bool:
    # bool is an Integral subclass but never a page number or frame count
    return isinstance(value, Integral) and not isinstance(value, bool)


def validate_frame_count(frame_count) -> int:
    """
    Check the frame capacity.

    Raises:
        InvalidFrameCount: If frame_count is not an integer >= 1
    """
    if not _is_int(frame_count) or frame_count < 1:
        raise InvalidFrameCount(frame_count)
    return int(frame_count)


def validate_references(references: Iterable) -> Tuple[int, ...]:
    """
    Check every reference and freeze the sequence.

    Raises:
        InvalidReference: On the first element that is not an integer
    """
    if isinstance(references, (str, bytes)):
        raise InvalidReference(0, references)

    checked = []
    for i, page in enumerate(references):
        if not _is_int(page):
            raise InvalidReference(i, page)
        checked.append(int(page))
    return tuple(checked)


# =============================================================================
# SIMULATION
# =============================================================================

def make_policy_state(policy: ReplacementPolicy,
                      references: Sequence[int] = (),
                      rng: Optional[random.Random] = None) -> PolicyState:
    """
    Build fresh auxiliary state for one run of the given policy.

    Args:
        policy (ReplacementPolicy): Policy to instantiate
        references (Sequence[int]): Full reference sequence (read by OPTIMAL)
        rng (Optional[random.Random]): Random source (read by RANDOM); a
            private unseeded generator when omitted

    Returns:
        PolicyState: A new, empty policy state object
    """
    return POLICY_CLASSES[ReplacementPolicy.parse(policy)](references, rng)


def simulate(policy, frame_count: int, references: Iterable[int],
             rng: Optional[random.Random] = None) -> SimulationResult:
    """
    Run a full page replacement simulation.

    All inputs are validated before the first reference is processed, so a
    bad input never produces a partial trace.

    Args:
        policy: ReplacementPolicy member or policy name
        frame_count (int): Number of frames, at least 1
        references (Iterable[int]): Page reference sequence
        rng (Optional[random.Random]): Random source for RANDOM; a private
            unseeded generator is used when omitted

    Returns:
        SimulationResult: The recorded history and summary counts

    Raises:
        PolicyNotRecognized: If the policy tag is unknown
        InvalidFrameCount: If frame_count is not a positive integer
        InvalidReference: If any reference is not an integer
    """
    policy = ReplacementPolicy.parse(policy)
    frame_count = validate_frame_count(frame_count)
    references = validate_references(references)

    # Policy state is private to this run and built from the validated input
    state = make_policy_state(policy, references, rng)

    # Frame table: None marks an empty frame
    frames: List[Optional[int]] = [None] * frame_count
    history: List[Step] = []
    events: List[str] = []
    faults = 0

    for i, page in enumerate(references):
        # ----- PAGE HIT -----
        if page in frames:
            slot = frames.index(page)
            state.on_hit(page)
            events.append(f"Hit: Page {page} in Frame {slot}")
            history.append(Step(i, page, tuple(frames), False, slot))
            continue

        # ----- PAGE FAULT -----
        faults += 1
        events.append(f"Fault: Page {page} not in memory")
        replaced = None

        if None in frames:
            # Free frame available - lowest index first
            slot = frames.index(None)
            frames[slot] = page
            events.append(f"Loaded: Page {page} -> Frame {slot}")
        else:
            # No free frame - the policy picks a victim
            slot = state.select_victim(frames, i)
            replaced = frames[slot]
            events.append(f"Evicting: Page {replaced} from Frame {slot}")
            frames[slot] = page
            events.append(f"Loaded: Page {page} -> Frame {slot} (replaced)")

        state.on_insert(page)
        history.append(Step(i, page, tuple(frames), True, slot, replaced))

    return SimulationResult(
        policy=policy,
        frame_count=frame_count,
        references=references,
        history=tuple(history),
        faults=faults,
        hits=len(references) - faults,
        events=tuple(events),
        policy_state=state.snapshot(),
    )


def compare_policies(frame_count: int, references: Iterable[int],
                     policies: Optional[Iterable] = None,
                     seed: Optional[int] = None) -> Dict[ReplacementPolicy, SimulationResult]:
    """
    Run several policies side by side on the same input.

    Each run gets its own frames and policy state; RANDOM gets its own
    generator seeded with ``seed``.

    Args:
        frame_count (int): Number of frames
        references (Iterable[int]): Page reference sequence
        policies (Optional[Iterable]): Policies to run, all of them by default
        seed (Optional[int]): Seed for the RANDOM policy's generator

    Returns:
        Dict[ReplacementPolicy, SimulationResult]: Results keyed by policy,
        in the order the policies were given
    """
    if policies is None:
        policies = ReplacementPolicy
    selected = [ReplacementPolicy.parse(p) for p in policies]
    frame_count = validate_frame_count(frame_count)
    references = validate_references(references)

    return {
        policy: simulate(policy, frame_count, references, rng=random.Random(seed))
        for policy in selected
    }
