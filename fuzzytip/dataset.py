"""Random samples labelled by the fuzzy rule base."""

from __future__ import annotations

from typing import Iterator

import numpy as np

from fuzzytip.rules import FuzzyRule

PRICE_RANGE = (15.0, 50.0)
TIME_RANGE = (15.0, 60.0)
QUALITY_RANGE = (0.0, 1.0)


class FuzzyDataset:
    """Normalised inputs and fuzzy tips for uniformly drawn situations."""

    def __init__(self, length: int, rng: np.random.Generator | int | None = None) -> None:
        if length < 0:
            raise ValueError("length must not be negative")
        generator = np.random.default_rng(rng)
        rule = FuzzyRule()
        prices = generator.uniform(*PRICE_RANGE, size=length)
        times = generator.uniform(*TIME_RANGE, size=length)
        qualities = generator.uniform(*QUALITY_RANGE, size=length)
        self.samples = np.column_stack([prices, times, qualities]).astype(np.float32)
        self.inputs = np.empty((length, 3), dtype=np.float32)
        self.targets = np.empty((length, 1), dtype=np.float32)
        for row, (price, wtime, quality) in enumerate(self.samples.tolist()):
            self.inputs[row] = rule.normalize_model_input(price, wtime, quality)
            self.targets[row, 0] = rule.apply_rules(price, wtime, quality)

    def __len__(self) -> int:
        return len(self.inputs)

    def __getitem__(self, index: int) -> tuple[np.ndarray, np.ndarray]:
        return self.inputs[index], self.targets[index]

    def batches(self, batch_size: int) -> Iterator[tuple[np.ndarray, np.ndarray]]:
        """Yield stacked (inputs, targets) in order; the last batch may be short."""
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        for start in range(0, len(self), batch_size):
            stop = start + batch_size
            yield self.inputs[start:stop], self.targets[start:stop]