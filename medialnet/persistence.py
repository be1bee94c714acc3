"""
Saving and loading of network weights.

Only the state listed in `NetworkState` is written: the settings, both
synapse weight matrices, and the training counters. Problems (the input and
target generators) are supplied again by the caller when loading, and the
cached medial activations are never stored.
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path


class PersistenceError(RuntimeError):
    """Raised when a weights file is missing, corrupt or doesn't fit the network."""


@dataclass
class NetworkState:
    number_of_inputs: int
    number_of_outputs: int
    number_of_medial_neurons: int
    learning_rate: float
    bias_value: float | None
    syn_one: list[list[float]]
    syn_two: list[list[float]]
    training_iterations: int
    average_error: float | None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "NetworkState":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Not a valid weights document: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceError("Not a valid weights document: expected an object at the top level")

        missing = [name for name in cls.__dataclass_fields__ if name not in data]
        if missing:
            raise PersistenceError(f"Weights document is missing {', '.join(missing)}")

        state = cls(
            number_of_inputs=_integer(data, "number_of_inputs"),
            number_of_outputs=_integer(data, "number_of_outputs"),
            number_of_medial_neurons=_integer(data, "number_of_medial_neurons"),
            learning_rate=_number(data, "learning_rate"),
            bias_value=_number(data, "bias_value", optional=True),
            syn_one=_matrix(data, "syn_one"),
            syn_two=_matrix(data, "syn_two"),
            training_iterations=_integer(data, "training_iterations"),
            average_error=_number(data, "average_error", optional=True),
        )
        if state.training_iterations < 0:
            raise PersistenceError(
                f"training_iterations can't be negative, got {state.training_iterations}"
            )
        state.check_dimensions()
        return state

    def check_dimensions(self):
        """Make sure both matrices have the shapes the neuron counts call for."""
        expected = {
            "syn_one": (self.number_of_inputs, self.number_of_medial_neurons),
            "syn_two": (self.number_of_medial_neurons, self.number_of_outputs),
        }
        for name, (n_rows, n_cols) in expected.items():
            matrix = getattr(self, name)
            if len(matrix) != n_rows or any(len(row) != n_cols for row in matrix):
                shape = f"{len(matrix)} rows of {sorted({len(row) for row in matrix})} columns"
                raise PersistenceError(f"{name} should be {n_rows}x{n_cols}, got {shape}")


def _integer(data: dict, name: str) -> int:
    value = data[name]
    # bool is a subclass of int, but `true` is not a neuron count.
    if not isinstance(value, int) or isinstance(value, bool):
        raise PersistenceError(f"{name} should be an integer, got {value!r}")
    return value


def _number(data: dict, name: str, optional: bool = False) -> float | None:
    value = data[name]
    if value is None and optional:
        return None
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise PersistenceError(f"{name} should be a number, got {value!r}")
    return float(value)


def _matrix(data: dict, name: str) -> list[list[float]]:
    rows = data[name]
    if not isinstance(rows, list) or not all(isinstance(row, list) for row in rows):
        raise PersistenceError(f"{name} should be a list of lists")
    matrix = []
    for row in rows:
        if not all(isinstance(w, (int, float)) and not isinstance(w, bool) for w in row):
            raise PersistenceError(f"{name} should only contain numbers")
        matrix.append([float(w) for w in row])
    return matrix


def write_state(state: NetworkState, path: Path):
    """
    Write to a temporary file next to `path` first, so an interrupted save
    never leaves a half-written weights file behind.
    """
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(state.to_json())
        tmp_path.replace(path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        raise PersistenceError(f"Could not save weights to {path}: {e}") from e


def read_state(path: Path) -> NetworkState:
    try:
        text = path.read_text()
    except OSError as e:
        raise PersistenceError(f"Could not read weights from {path}: {e}") from e
    return NetworkState.from_json(text)
