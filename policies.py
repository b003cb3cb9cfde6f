# policies.py
"""
Per-run bookkeeping for each page replacement policy.

Every policy class exposes the same small interface so the engine can drive
them interchangeably:

    on_hit(page)                     - referenced page was already resident
    on_insert(page)                  - page was just loaded into a frame
    select_victim(frames, position)  - choose the slot to evict and forget its page
    snapshot()                       - auxiliary state in plain form, for display

A policy object is created fresh for every simulation run and owned by it.
"""

import random
from collections import deque
from typing import Deque, Dict, List, Optional, Sequence


class PolicyState:
    """Common base: no bookkeeping at all."""

    def __init__(self, references: Sequence[int] = (), rng: Optional[random.Random] = None):
        self.references = references
        # Private generator unless the caller supplies one
        self.rng = rng if rng is not None else random.Random()

    def on_hit(self, page: int):
        pass

    def on_insert(self, page: int):
        pass

    def select_victim(self, frames: List[Optional[int]], position: int) -> int:
        raise NotImplementedError

    def snapshot(self) -> Dict:
        return {}


# =============================================================================
# QUEUE / STACK BASED POLICIES
# =============================================================================

class FIFOState(PolicyState):
    """
    First-In-First-Out.

    Keeps resident pages in arrival order; a hit does not reorder anything.
    """

    def __init__(self, references: Sequence[int] = (), rng: Optional[random.Random] = None):
        super().__init__(references, rng)
        self.queue: Deque[int] = deque()

    def on_insert(self, page: int):
        self.queue.append(page)

    def select_victim(self, frames: List[Optional[int]], position: int) -> int:
        victim = self.queue.popleft()
        return frames.index(victim)

    def snapshot(self) -> Dict:
        return {"queue": list(self.queue)}


class LRUState(PolicyState):
    """
    Least Recently Used.

    The recency stack holds the most recently used page at the front and the
    least recently used one at the back.
    """

    def __init__(self, references: Sequence[int] = (), rng: Optional[random.Random] = None):
        super().__init__(references, rng)
        self.stack: Deque[int] = deque()

    def on_hit(self, page: int):
        self.stack.remove(page)
        self.stack.appendleft(page)

    def on_insert(self, page: int):
        self.stack.appendleft(page)

    def select_victim(self, frames: List[Optional[int]], position: int) -> int:
        victim = self.stack.pop()
        return frames.index(victim)

    def snapshot(self) -> Dict:
        return {"stack": list(self.stack)}


class LFUState(PolicyState):
    """
    Least Frequently Used.

    Among pages sharing the minimum count, the one in the lowest frame index
    is evicted.
    """

    def __init__(self, references: Sequence[int] = (), rng: Optional[random.Random] = None):
        super().__init__(references, rng)
        self.freq: Dict[int, int] = {}

    def on_hit(self, page: int):
        self.freq[page] = self.freq.get(page, 0) + 1

    def on_insert(self, page: int):
        self.freq[page] = 1

    def select_victim(self, frames: List[Optional[int]], position: int) -> int:
        min_freq = float('inf')
        victim_slot = 0

        # Strict comparison keeps the first (lowest index) slot on ties
        for slot, page in enumerate(frames):
            count = self.freq.get(page, 0)
            if count < min_freq:
                min_freq = count
                victim_slot = slot

        self.freq.pop(frames[victim_slot], None)
        return victim_slot

    def snapshot(self) -> Dict:
        return {"frequency": dict(self.freq)}


class ClockState(PolicyState):
    """
    Second chance (CLOCK).

    The arrival queue is walked as a circular list. A page whose reference
    bit is set has the bit cleared and is moved to the back instead of being
    evicted; the first page found with a clear bit is the victim.
    """

    def __init__(self, references: Sequence[int] = (), rng: Optional[random.Random] = None):
        super().__init__(references, rng)
        self.queue: Deque[int] = deque()
        self.ref_bits: Dict[int, bool] = {}
        self.last_scan_length = 0
        self.scan_lengths: List[int] = []

    def on_hit(self, page: int):
        self.ref_bits[page] = True

    def on_insert(self, page: int):
        self.queue.append(page)
        self.ref_bits[page] = False

    def select_victim(self, frames: List[Optional[int]], position: int) -> int:
        inspections = 0
        while True:
            candidate = self.queue[0]
            inspections += 1
            if self.ref_bits.get(candidate, False):
                self.ref_bits[candidate] = False
                self.queue.rotate(-1)
                continue

            self.queue.popleft()
            del self.ref_bits[candidate]
            self.last_scan_length = inspections
            self.scan_lengths.append(inspections)
            return frames.index(candidate)

    def snapshot(self) -> Dict:
        return {
            "queue": list(self.queue),
            "reference_bits": {p: self.ref_bits[p] for p in self.queue},
            "scan_lengths": list(self.scan_lengths),
        }


# =============================================================================
# STATELESS POLICIES
# =============================================================================

class OptimalState(PolicyState):
    """
    Belady's optimal (clairvoyant) replacement.

    Looks at the references that have not been processed yet. A resident
    page that never occurs again is evicted straight away (first one in
    frame order); otherwise the page whose next use is farthest away goes.
    """

    def _next_use(self, page: int, start: int) -> Optional[int]:
        for idx in range(start, len(self.references)):
            if self.references[idx] == page:
                return idx
        return None

    def select_victim(self, frames: List[Optional[int]], position: int) -> int:
        farthest = -1
        victim_slot = 0

        for slot, page in enumerate(frames):
            next_use = self._next_use(page, position + 1)
            if next_use is None:
                return slot
            if next_use > farthest:
                farthest = next_use
                victim_slot = slot

        return victim_slot


class RandomState(PolicyState):
    """Evicts a uniformly random frame using the injected generator."""

    def select_victim(self, frames: List[Optional[int]], position: int) -> int:
        return self.rng.randrange(len(frames))
