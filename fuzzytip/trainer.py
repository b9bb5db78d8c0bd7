"""Training and evaluation of a network against the fuzzy rule base."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from typing import Callable

import numpy as np

from fuzzytip.dataset import FuzzyDataset
from fuzzytip.network import Activation, Adam, Network
from fuzzytip.rules import FuzzyRule


@dataclass(frozen=True)
class ProgressReport:
    """One progress message from training or testing."""

    info: str
    loss: float
    index: int
    epoch: int
    data_size: int


ProgressCallback = Callable[[ProgressReport], None]


class FuzzyTrainer:
    """Holds a network, trains it on fuzzy tips and reports progress."""

    def __init__(
        self,
        hidden: int,
        layers: int,
        activation: Activation = Activation.RELU,
        on_train_progress: ProgressCallback | None = None,
        on_test_progress: ProgressCallback | None = None,
    ) -> None:
        self.log_interval = 5
        self.train_batch_size = 16
        self.iterations = 1
        self.learning_rate = 0.001
        self.abort_train = False
        self.rng: np.random.Generator = np.random.default_rng()
        self.on_train_progress = on_train_progress
        self.on_test_progress = on_test_progress
        self.rule = FuzzyRule()
        self.network: Network
        self.str_network: list[str] = []
        self.create_network(hidden, layers, activation)

    def create_network(self, hidden: int, layers: int, activation: Activation) -> None:
        """Replace the network with a freshly initialised one."""
        self.network = Network(hidden, layers, activation, rng=self.rng)
        self.str_network = self.network.describe()

    def save_net(self, path: str | PathLike[str]) -> None:
        self.network.save(path)

    def load_net(self, path: str | PathLike[str]) -> None:
        self.network.load(path)

    def _report(self, callback: ProgressCallback | None, report: ProgressReport) -> None:
        if callback is not None:
            callback(report)

    def _train_epoch(
        self, dataset: FuzzyDataset, optimizer: Adam, epoch: int
    ) -> list[float]:
        data_size = len(dataset)
        losses: list[float] = []
        running = 0.0
        for index, (inputs, targets) in enumerate(
            dataset.batches(self.train_batch_size), start=1
        ):
            current, grads = self.network.loss_and_gradients(inputs, targets)
            if np.isnan(current):
                raise FloatingPointError("training loss became NaN")
            optimizer.step(grads)
            running += current
            losses.append(current)
            if (index - 1) % self.log_interval == 0:
                end = min(data_size, (index + 1) * self.train_batch_size)
                info = (
                    f"Train Epoch: {epoch} {end}/{data_size}"
                    f"\tLoss: {running / end:.6f}\t Current Loss: {current:.6f}"
                )
                self._report(
                    self.on_train_progress,
                    ProgressReport(info, current, index, epoch, data_size),
                )
            if self.abort_train:
                break
        return losses

    def train_main(self, length_dataset: int) -> list[float]:
        """Train on a new random dataset; returns every batch loss."""
        if self.log_interval < 1:
            raise ValueError("log_interval must be at least 1")
        dataset = FuzzyDataset(length_dataset, self.rng)
        optimizer = Adam(self.network, self.learning_rate)
        losses: list[float] = []
        for epoch in range(1, self.iterations + 1):
            losses.extend(self._train_epoch(dataset, optimizer, epoch))
        return losses

    def test_main(self, n_test: int) -> list[float]:
        """Evaluate sample by sample; returns the root of each sample's loss."""
        dataset = FuzzyDataset(n_test, self.rng)
        data_size = len(dataset)
        errors: list[float] = []
        for index, (inputs, targets) in enumerate(dataset.batches(1)):
            current, _ = self.network.loss_and_gradients(inputs, targets)
            if np.isnan(current):
                raise FloatingPointError("test loss became NaN")
            errors.append(float(np.sqrt(current)))
            median = sorted(errors)[len(errors) // 2]
            info = f"Test: {index},  Median Error: {median:.6f}"
            self._report(
                self.on_test_progress,
                ProgressReport(info, current, index, 0, data_size),
            )
        return errors

    def test_model(self, price: float, wtime: float, quality: float) -> tuple[float, float]:
        """Return (fuzzy tip, network tip) for one situation."""
        fuzzy_tip = self.rule.apply_rules(price, wtime, quality)
        model_input = self.rule.normalize_model_input(price, wtime, quality)
        model_tip = float(self.network.forward(model_input)[0])
        return fuzzy_tip, model_tip