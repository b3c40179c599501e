import logging
from typing import Optional

import numpy as np

logger = logging.getLogger(__name__)

MIN_WINDOW_SIZE = 3
MAX_WINDOW_SIZE = 255


class MedianFilter:
    """
    Sliding-window median filter for a stream of scalar samples.

    The window is a ring buffer of the most recent ``window_size`` samples. Two
    index maps keep a sorted view of it: ``rank_of[slot]`` is the rank of a ring
    slot and ``slot_at_rank[rank]`` is the slot holding a rank. A new sample
    overwrites the oldest slot and is then walked left or right through the
    sorted view until it sits between its neighbours, so an insertion costs time
    proportional to the number of ranks the sample crosses.

    Sample and accumulator types are numpy dtypes. The accumulator holds the
    running sum and must be wide enough for ``window_size * max(|sample|)``;
    this is not checked.
    """

    def __init__(self, window_size: int = 5, seed=0, sample_dtype=np.int32, accumulator_dtype=np.int64):
        """
        Args:
            window_size (int): Number of samples in the window, clamped to [3, 255].
                Even sizes report the lower of the two middle samples as the median.
            seed: Value every slot starts with, so the filter is full from the start.
            sample_dtype: numpy dtype of the filtered samples.
            accumulator_dtype: numpy dtype used for the running sum, mean and
                standard deviation.
        """
        size = max(MIN_WINDOW_SIZE, min(MAX_WINDOW_SIZE, int(window_size)))
        if size != window_size:
            logger.debug(f"[INIT] Window size {window_size} clamped to {size}")

        self.sample_dtype = np.dtype(sample_dtype)
        self.accumulator_dtype = np.dtype(accumulator_dtype)
        self._size = size
        self._median_index = size >> 1

        seed = self.sample_dtype.type(seed)
        self._values: Optional[np.ndarray] = np.full(size, seed, dtype=self.sample_dtype)
        self._rank_of: Optional[np.ndarray] = np.arange(size, dtype=np.uint8)
        self._slot_at_rank: Optional[np.ndarray] = np.arange(size, dtype=np.uint8)
        self._cursor = self._median_index
        self._sum = self._acc(size) * self._acc(seed)

    @property
    def window_size(self) -> int:
        return self._size

    @property
    def median_index(self) -> int:
        """Rank reported as the median: the middle one, or the lower middle one for even sizes."""
        return self._median_index

    @property
    def is_released(self) -> bool:
        return self._values is None

    @property
    def rank_of(self) -> np.ndarray:
        """Copy of the rank held by each ring slot."""
        self._check_alive()
        return self._rank_of.copy()

    @property
    def slot_at_rank(self) -> np.ndarray:
        """Copy of the ring slot holding each rank."""
        self._check_alive()
        return self._slot_at_rank.copy()

    def __len__(self) -> int:
        return self._size

    def insert(self, value):
        """
        Add a new sample, replacing the oldest one, and return the new median.

        Args:
            value: New sample, converted to ``sample_dtype``.
        Returns:
            The median of the window as a ``sample_dtype`` scalar.
        """
        self._check_alive()
        values, rank_of, slot_at_rank = self._values, self._rank_of, self._slot_at_rank
        slot = self._cursor
        value = self.sample_dtype.type(value)

        self._sum += self._acc(value) - self._acc(values[slot])
        values[slot] = value

        # Only the overwritten slot can be out of order; walk it to its place.
        rank = int(rank_of[slot])
        moved = False
        while rank > 0:
            neighbour = slot_at_rank[rank - 1]
            if not value < values[neighbour]:
                break
            slot_at_rank[rank] = neighbour
            rank_of[neighbour] = rank
            rank -= 1
            slot_at_rank[rank] = slot
            rank_of[slot] = rank
            moved = True

        if not moved:
            last = self._size - 1
            while rank < last:
                neighbour = slot_at_rank[rank + 1]
                if not value > values[neighbour]:
                    break
                slot_at_rank[rank] = neighbour
                rank_of[neighbour] = rank
                rank += 1
                slot_at_rank[rank] = slot
                rank_of[slot] = rank

        self._cursor += 1
        if self._cursor == self._size:
            self._cursor = 0

        return values[slot_at_rank[self._median_index]]

    def peek(self):
        """Return the current median without adding a sample."""
        self._check_alive()
        return self._values[self._slot_at_rank[self._median_index]]

    def min(self):
        self._check_alive()
        return self._values[self._slot_at_rank[0]]

    def max(self):
        self._check_alive()
        return self._values[self._slot_at_rank[self._size - 1]]

    def mean(self):
        """
        Mean of the window from the running sum, in ``accumulator_dtype``.

        Integer accumulators truncate toward zero.
        """
        self._check_alive()
        total = self._sum
        if np.issubdtype(self.accumulator_dtype, np.integer):
            quotient = abs(int(total)) // self._size
            return self._acc(quotient if total >= 0 else -quotient)
        return self._acc(total / self._size)

    def standard_deviation(self):
        """
        Sample standard deviation (Bessel corrected) of the window.

        Not incremental: every call scans the whole window, so it is O(window_size)
        unlike the other accessors. Integer accumulators round to the nearest
        integer by adding 0.5 and truncating. Floating accumulators skip that
        step and return the unrounded root, since truncation is a no-op there.
        """
        self._check_alive()
        mean = self.mean()
        diffs = self._values.astype(self.accumulator_dtype) - mean
        square_sum = np.sum(diffs * diffs, dtype=self.accumulator_dtype)
        deviation = np.sqrt(float(square_sum) / (self._size - 1.0))
        if np.issubdtype(self.accumulator_dtype, np.integer):
            return self._acc(int(deviation + 0.5))
        return self._acc(deviation)

    def window(self) -> np.ndarray:
        """Copy of the window in ring (insertion) order."""
        self._check_alive()
        return self._values.copy()

    def sorted_values(self) -> np.ndarray:
        """Copy of the window in ascending rank order."""
        self._check_alive()
        return self._values[self._slot_at_rank]

    def log_state(self):
        """Dump the ring buffer, both index maps and the sorted data at DEBUG level."""
        self._check_alive()
        logger.debug(f"[DATA] Data in ring buffer: {self._values.tolist()}")
        logger.debug(f"[DATA] Slot at rank, data sorted by size: {self._slot_at_rank.tolist()}")
        logger.debug(f"[DATA] Rank of slot, size data sorted by age: {self._rank_of.tolist()}")
        logger.debug(f"[DATA] Data sorted by size: {self.sorted_values().tolist()}")

    def copy(self) -> "MedianFilter":
        """Independent duplicate of the filter, arrays included."""
        self._check_alive()
        other = self.__class__.__new__(self.__class__)
        other.__dict__.update(self.__dict__)
        other._values = self._values.copy()
        other._rank_of = self._rank_of.copy()
        other._slot_at_rank = self._slot_at_rank.copy()
        return other

    def __copy__(self) -> "MedianFilter":
        return self.copy()

    def __deepcopy__(self, memo) -> "MedianFilter":
        return self.copy()

    def move(self) -> "MedianFilter":
        """Hand the arrays over to a new filter and leave this one released."""
        self._check_alive()
        other = self.__class__.__new__(self.__class__)
        other.__dict__.update(self.__dict__)
        self.release()
        return other

    def release(self):
        """Drop the backing arrays. Any later use of the filter raises RuntimeError."""
        self._values = None
        self._rank_of = None
        self._slot_at_rank = None

    def _check_alive(self):
        if self._values is None:
            raise RuntimeError("Filter has been released")

    def _acc(self, value):
        return self.accumulator_dtype.type(value)
