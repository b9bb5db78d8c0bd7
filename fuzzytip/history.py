"""Loss histories gathered during training and testing for plotting."""

from __future__ import annotations

import math
import threading


class PlotHistory:
    """Thread-safe record of training losses and test errors.

    Training losses are stored as reported. Test losses are stored as their
    square root (the error), and the smallest and largest errors are tracked.
    Indices count from 1 in the order the values arrive.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.index: list[int] = []
        self.loss: list[float] = []
        self.test_index: list[int] = []
        self.test_loss: list[float] = []
        self.test_error_min: float | None = None
        self.test_error_max: float | None = None

    def add_train(self, loss: float) -> int:
        """Record one training loss; returns its 1-based index."""
        with self._lock:
            self.loss.append(float(loss))
            position = len(self.loss)
            self.index.append(position)
            return position

    def add_test(self, loss: float) -> float:
        """Record one test loss as its root error; returns that error."""
        if loss < 0:
            raise ValueError("loss must not be negative")
        error = math.sqrt(loss)
        with self._lock:
            self.test_loss.append(error)
            self.test_index.append(len(self.test_loss))
            if len(self.test_loss) == 1:
                self.test_error_min = error
                self.test_error_max = error
            else:
                self.test_error_min = min(error, self.test_error_min)
                self.test_error_max = max(error, self.test_error_max)
        return error

    def clear(self) -> None:
        """Forget the training history."""
        with self._lock:
            self.index.clear()
            self.loss.clear()

    def clear_test(self) -> None:
        """Forget the test history."""
        with self._lock:
            self.test_index.clear()
            self.test_loss.clear()
            self.test_error_min = None
            self.test_error_max = None