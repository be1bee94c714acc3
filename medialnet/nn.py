import math
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from persistence import NetworkState, PersistenceError, read_state, write_state
from problems import Polar, Problem


class InputArityError(ValueError):
    """Raised when `compute` gets the wrong number of input values."""


@dataclass(eq=True, frozen=True)
class NetworkConfig:
    number_of_inputs: int
    number_of_outputs: int
    number_of_medial_neurons: int = 40
    learning_rate: float = 0.01
    bias_value: float | None = 2.0

    def __post_init__(self):
        for name in ("number_of_inputs", "number_of_outputs", "number_of_medial_neurons"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")

    @property
    def has_bias(self) -> bool:
        return self.bias_value is not None


class NeuralNetwork:
    """
    Input => medial (tanh) => output (linear), fully connected.

    syn_one[i][j] is the weight from input i to medial neuron j, and
    syn_two[j][k] the weight from medial neuron j to output k. The bias
    neuron, when enabled, is the last input and carries a constant value.
    """

    def __init__(
        self,
        problem: Problem | None = None,
        bias_value: float | None = 2.0,
        number_of_medial_neurons: int = 40,
        learning_rate: float = 0.01,
        rng: random.Random | None = None,
    ):
        self.problem = problem or Polar()
        self.rng = rng or random.Random()

        # Draw one sample to find out how many inputs and outputs we need.
        sample = list(self.problem.generate_input())
        target = list(self.problem.generate_target(sample))

        self.config = NetworkConfig(
            number_of_inputs=len(sample) + (bias_value is not None),
            number_of_outputs=len(target),
            number_of_medial_neurons=number_of_medial_neurons,
            learning_rate=learning_rate,
            bias_value=bias_value,
        )
        self.training_iterations = 0
        self.average_error: float | None = None

        self.syn_one = self._random_matrix(self.number_of_inputs, self.number_of_medial_neurons)
        self.syn_two = self._random_matrix(self.number_of_medial_neurons, self.number_of_outputs)

        # Stashed by `compute`, consumed by `backpropagate`.
        self.medial_in: list[float] = []
        self.medial_out: list[float] = []

    def __repr__(self):
        return (
            f"NeuralNetwork({self.number_of_inputs}, "
            f"{self.number_of_medial_neurons}, {self.number_of_outputs})"
        )

    def _random_matrix(self, n_rows: int, n_cols: int) -> list[list[float]]:
        return [[0.1 * self.rng.random() for _ in range(n_cols)] for _ in range(n_rows)]

    @property
    def number_of_inputs(self) -> int:
        return self.config.number_of_inputs

    @property
    def number_of_outputs(self) -> int:
        return self.config.number_of_outputs

    @property
    def number_of_medial_neurons(self) -> int:
        return self.config.number_of_medial_neurons

    @property
    def learning_rate(self) -> float:
        return self.config.learning_rate

    @property
    def bias_value(self) -> float | None:
        return self.config.bias_value

    def inputs_with_bias(self, inputs: Sequence[float]) -> list[float]:
        """
        Returns a copy of `inputs` with the bias neuron value appended,
        ready to be passed to `compute`.
        """
        result = list(inputs)
        if self.config.has_bias:
            result.append(self.bias_value)
        return result

    def compute(self, inputs: Sequence[float]) -> list[float]:
        """
        Returns the output values for the given values of every input
        neuron, INCLUDING the bias neuron. Use `inputs_with_bias` to add it.
        """
        if len(inputs) != self.number_of_inputs:
            raise InputArityError(f"Expected {self.number_of_inputs} inputs, got {len(inputs)}")

        self.medial_in = [
            sum(self.syn_one[i][j] * inputs[i] for i in range(self.number_of_inputs))
            for j in range(self.number_of_medial_neurons)
        ]
        self.medial_out = [math.tanh(x) for x in self.medial_in]

        return [
            sum(self.syn_two[j][k] * self.medial_out[j] for j in range(self.number_of_medial_neurons))
            for k in range(self.number_of_outputs)
        ]

    def backpropagate(self, inputs: Sequence[float], errors: Sequence[float]):
        """
        Apply one online gradient descent step, given the inputs of the last
        `compute` call and the signed errors (target - actual) of its outputs.

        The output layer is updated first, and the error signal sent back to
        the medial layer is computed from the updated `syn_two`. Textbook
        backprop would use the weights from before the update; we keep this
        ordering so that trained weight files stay reproducible.
        """
        if len(errors) != self.number_of_outputs:
            raise InputArityError(f"Expected {self.number_of_outputs} errors, got {len(errors)}")
        if len(self.medial_out) != self.number_of_medial_neurons:
            raise RuntimeError("backpropagate called before compute")

        rate = self.learning_rate
        for j in range(self.number_of_medial_neurons):
            for k in range(self.number_of_outputs):
                self.syn_two[j][k] += rate * self.medial_out[j] * errors[k]

        sigma = [
            sum(errors[k] * self.syn_two[j][k] for k in range(self.number_of_outputs))
            for j in range(self.number_of_medial_neurons)
        ]
        # d/dx tanh(x) = 1 - tanh(x)^2
        derivative = [1 - out**2 for out in self.medial_out]

        for i in range(self.number_of_inputs):
            for j in range(self.number_of_medial_neurons):
                self.syn_one[i][j] += rate * derivative[j] * sigma[j] * inputs[i]

    def state(self) -> NetworkState:
        return NetworkState(
            number_of_inputs=self.number_of_inputs,
            number_of_outputs=self.number_of_outputs,
            number_of_medial_neurons=self.number_of_medial_neurons,
            learning_rate=self.learning_rate,
            bias_value=self.bias_value,
            syn_one=[list(row) for row in self.syn_one],
            syn_two=[list(row) for row in self.syn_two],
            training_iterations=self.training_iterations,
            average_error=self.average_error,
        )

    def save(self, path: Path):
        """Save the settings, synapse weights and training state to `path`."""
        write_state(self.state(), Path(path))

    def load(self, path: Path):
        """
        Replace the settings, synapse weights and training state with those
        saved at `path`. The problem attached to this network is kept.
        """
        state = read_state(Path(path))

        # The stored network has to fit the problem we generate samples with.
        raw_inputs = self.number_of_inputs - self.config.has_bias
        stored_raw_inputs = state.number_of_inputs - (state.bias_value is not None)
        if stored_raw_inputs != raw_inputs or state.number_of_outputs != self.number_of_outputs:
            raise PersistenceError(
                f"{path} holds a network for {stored_raw_inputs} inputs and "
                f"{state.number_of_outputs} outputs, but the problem has "
                f"{raw_inputs} inputs and {self.number_of_outputs} outputs"
            )

        try:
            config = NetworkConfig(
                number_of_inputs=state.number_of_inputs,
                number_of_outputs=state.number_of_outputs,
                number_of_medial_neurons=state.number_of_medial_neurons,
                learning_rate=state.learning_rate,
                bias_value=state.bias_value,
            )
        except ValueError as e:
            raise PersistenceError(f"{path}: {e}") from e

        self.config = config
        self.syn_one = [list(row) for row in state.syn_one]
        self.syn_two = [list(row) for row in state.syn_two]
        self.training_iterations = state.training_iterations
        self.average_error = state.average_error
        self.medial_in = []
        self.medial_out = []
