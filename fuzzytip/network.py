"""Small fully connected regression network with Adam, built on numpy."""

from __future__ import annotations

import math
from enum import Enum
from os import PathLike
from typing import Iterator

import numpy as np

_GELU_SCALE = math.sqrt(2.0 / math.pi)
_GELU_CUBIC = 0.044715
_LEAKY_SLOPE = 0.01
_ELU_ALPHA = 1.0
_INPUTS = 3
_OUTPUTS = 1
_ADAM_BETAS = (0.9, 0.999)
_ADAM_EPS = 1e-8


class Activation(Enum):
    """Activation functions placed after every hidden linear layer."""

    RELU = "relu"
    ELU = "elu"
    LEAKY_RELU = "leaky_relu"
    GELU = "gelu"
    TANH = "tanh"
    SIGMOID = "sigmoid"

    def apply(self, z: np.ndarray) -> np.ndarray:
        """Evaluate the activation element-wise."""
        z = np.asarray(z, dtype=np.float64)
        if self is Activation.RELU:
            return np.maximum(z, 0.0)
        if self is Activation.ELU:
            return np.where(z > 0, z, _ELU_ALPHA * np.expm1(np.minimum(z, 0.0)))
        if self is Activation.LEAKY_RELU:
            return np.where(z > 0, z, _LEAKY_SLOPE * z)
        if self is Activation.GELU:
            inner = _GELU_SCALE * (z + _GELU_CUBIC * z**3)
            return 0.5 * z * (1.0 + np.tanh(inner))
        if self is Activation.TANH:
            return np.tanh(z)
        return 1.0 / (1.0 + np.exp(-z))

    def derivative(self, z: np.ndarray) -> np.ndarray:
        """Derivative of the activation with respect to its input."""
        z = np.asarray(z, dtype=np.float64)
        if self is Activation.RELU:
            return (z > 0).astype(np.float64)
        if self is Activation.ELU:
            return np.where(z > 0, 1.0, _ELU_ALPHA * np.exp(np.minimum(z, 0.0)))
        if self is Activation.LEAKY_RELU:
            return np.where(z > 0, 1.0, _LEAKY_SLOPE)
        if self is Activation.GELU:
            inner = _GELU_SCALE * (z + _GELU_CUBIC * z**3)
            t = np.tanh(inner)
            d_inner = _GELU_SCALE * (1.0 + 3.0 * _GELU_CUBIC * z**2)
            return 0.5 * (1.0 + t) + 0.5 * z * (1.0 - t**2) * d_inner
        if self is Activation.TANH:
            return 1.0 - np.tanh(z) ** 2
        s = 1.0 / (1.0 + np.exp(-z))
        return s * (1.0 - s)


def mse_loss(output: np.ndarray, target: np.ndarray) -> float:
    """Mean squared error between two arrays of the same shape."""
    output = np.asarray(output, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)
    if output.shape != target.shape:
        raise ValueError(
            f"shape mismatch: output {output.shape} vs target {target.shape}"
        )
    if output.size == 0:
        raise ValueError("cannot compute the loss of empty arrays")
    return float(np.mean((output - target) ** 2))


class Network:
    """Linear(3, h), act, [Linear(h, h), act] * layers, Linear(h, 1)."""

    def __init__(
        self,
        hidden: int,
        layers: int,
        activation: Activation = Activation.RELU,
        rng: np.random.Generator | int | None = None,
    ) -> None:
        if hidden < 1:
            raise ValueError("hidden must be at least 1")
        if layers < 0:
            raise ValueError("layers must not be negative")
        self.hidden = hidden
        self.layers = layers
        self.activation = Activation(activation)
        generator = np.random.default_rng(rng)
        sizes = [_INPUTS] + [hidden] * (layers + 1) + [_OUTPUTS]
        self._weights: list[np.ndarray] = []
        self._biases: list[np.ndarray] = []
        for fan_in, fan_out in zip(sizes, sizes[1:]):
            bound = 1.0 / math.sqrt(fan_in)
            self._weights.append(generator.uniform(-bound, bound, (fan_out, fan_in)))
            self._biases.append(generator.uniform(-bound, bound, fan_out))

    @property
    def parameters(self) -> list[np.ndarray]:
        """Parameter arrays in the order of :meth:`named_parameters`."""
        return [array for _, array in self.named_parameters()]

    def named_parameters(self) -> list[tuple[str, np.ndarray]]:
        """Weights and biases keyed by their position in the layer sequence."""
        named = []
        for j, (weight, bias) in enumerate(zip(self._weights, self._biases)):
            named.append((f"{2 * j}.weight", weight))
            named.append((f"{2 * j}.bias", bias))
        return named

    def _propagate(
        self, x: np.ndarray
    ) -> tuple[np.ndarray, list[np.ndarray], list[np.ndarray]]:
        a = np.atleast_2d(np.asarray(x, dtype=np.float64))
        if a.ndim != 2 or a.shape[1] != _INPUTS:
            raise ValueError(f"expected inputs with {_INPUTS} features, got {a.shape}")
        pre_activations: list[np.ndarray] = []
        activations = [a]
        last = len(self._weights) - 1
        for j, (weight, bias) in enumerate(zip(self._weights, self._biases)):
            z = a @ weight.T + bias
            if j < last:
                pre_activations.append(z)
                a = self.activation.apply(z)
                activations.append(a)
            else:
                a = z
        return a, pre_activations, activations

    def forward(self, x: np.ndarray) -> np.ndarray:
        """Predict tips; a single sample gives shape (1,), a batch (N, 1)."""
        single = np.ndim(x) == 1
        output, _, _ = self._propagate(x)
        return output[0] if single else output

    __call__ = forward

    def loss_and_gradients(
        self, x: np.ndarray, target: np.ndarray
    ) -> tuple[float, list[np.ndarray]]:
        """MSE loss of a batch and its gradients for every parameter."""
        output, pre_activations, activations = self._propagate(x)
        target = np.asarray(target, dtype=np.float64)
        if target.size != output.size:
            raise ValueError(
                f"target holds {target.size} values, output holds {output.size}"
            )
        target = target.reshape(output.shape)
        loss = mse_loss(output, target)
        delta = 2.0 * (output - target) / output.size
        grads: list[np.ndarray] = []
        for j in reversed(range(len(self._weights))):
            grads.append(delta.sum(axis=0))
            grads.append(delta.T @ activations[j])
            if j > 0:
                delta = (delta @ self._weights[j]) * self.activation.derivative(
                    pre_activations[j - 1]
                )
        grads.reverse()
        return loss, grads

    def _module_lines(self) -> Iterator[str]:
        sizes = [_INPUTS] + [self.hidden] * (self.layers + 1) + [_OUTPUTS]
        count = len(self._weights)
        for j, (fan_in, fan_out) in enumerate(zip(sizes, sizes[1:])):
            yield (
                f"Module: {2 * j}, Keys: Linear | Linear(in_features={fan_in}, "
                f"out_features={fan_out}, bias=true) | ,weight,bias"
            )
            if j < count - 1:
                yield (
                    f"Module: {2 * j + 1}, Keys: Functional | "
                    f"Functional({self.activation.value}) | "
                )

    def describe(self) -> list[str]:
        """Human readable summary of modules and parameters."""
        lines = ["Network: Sequential"]
        lines.extend(self._module_lines())
        total = 0
        for index, (name, array) in enumerate(self.named_parameters()):
            shape = ",".join(str(n) for n in array.shape)
            total += array.size
            lines.append(
                f"Parameter: {index} | {name}, N={array.ndim} | {shape}| S={array.size}"
            )
        lines.append(f"Number of Parameters: {total}")
        return lines

    def save(self, path: str | PathLike[str]) -> None:
        """Write all parameters to ``path`` in numpy's npz format."""
        with open(path, "wb") as handle:
            np.savez(handle, **dict(self.named_parameters()))

    def load(self, path: str | PathLike[str]) -> None:
        """Read parameters written by :meth:`save` into this network."""
        with np.load(path) as data:
            named = self.named_parameters()
            expected = {name for name, _ in named}
            if set(data.files) != expected:
                raise ValueError("stored parameters do not match this network")
            for name, array in named:
                stored = data[name]
                if stored.shape != array.shape:
                    raise ValueError(
                        f"parameter {name} has shape {stored.shape}, "
                        f"expected {array.shape}"
                    )
            for name, array in named:
                array[...] = data[name]


class Adam:
    """Adam optimiser updating a network's parameters in place."""

    def __init__(self, network: Network, learning_rate: float = 0.001) -> None:
        if learning_rate <= 0:
            raise ValueError("learning_rate must be positive")
        self.params = network.parameters
        self.learning_rate = learning_rate
        self.beta1, self.beta2 = _ADAM_BETAS
        self.eps = _ADAM_EPS
        self.steps = 0
        self._m = [np.zeros_like(p) for p in self.params]
        self._v = [np.zeros_like(p) for p in self.params]

    def step(self, gradients: list[np.ndarray]) -> None:
        """Apply one update from gradients aligned with the parameters."""
        if len(gradients) != len(self.params):
            raise ValueError("one gradient per parameter is required")
        self.steps += 1
        correction1 = 1.0 - self.beta1**self.steps
        correction2 = 1.0 - self.beta2**self.steps
        for param, grad, m, v in zip(self.params, gradients, self._m, self._v):
            if grad.shape != param.shape:
                raise ValueError("gradient shape does not match its parameter")
            m *= self.beta1
            m += (1.0 - self.beta1) * grad
            v *= self.beta2
            v += (1.0 - self.beta2) * grad**2
            m_hat = m / correction1
            v_hat = v / correction2
            param -= self.learning_rate * m_hat / (np.sqrt(v_hat) + self.eps)