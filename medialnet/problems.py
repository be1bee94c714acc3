"""
Problems the network can be trained on.

A problem generates random inputs, and the expected outputs for any given
inputs. Both must always return lists of the same length, even when there
is only a single value.
"""

import math
import random
from typing import Callable, Protocol, Sequence


class Problem(Protocol):
    def generate_input(self) -> list[float]: ...

    def generate_target(self, inputs: Sequence[float]) -> list[float]: ...


class Addition:
    """Add two real numbers in [0, 10)."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def generate_input(self) -> list[float]:
        return [self.rng.random() * 10, self.rng.random() * 10]

    def generate_target(self, inputs: Sequence[float]) -> list[float]:
        x, y = inputs
        return [x + y]


class IntegerAddition(Addition):
    """Add two integers from 0 to 9."""

    def generate_input(self) -> list[float]:
        return [float(self.rng.randrange(10)), float(self.rng.randrange(10))]


class Polar:
    """Convert polar coordinates (radius, angle) to cartesian (x, y)."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def generate_input(self) -> list[float]:
        return [self.rng.random(), self.rng.random() * 2 * math.pi]

    def generate_target(self, inputs: Sequence[float]) -> list[float]:
        radius, angle = inputs
        return [radius * math.cos(angle), radius * math.sin(angle)]


class CallableProblem:
    """
    Wrap a pair of plain functions: `input_fn()` returning the inputs, and
    `target_fn(*inputs)` returning the expected outputs.
    """

    def __init__(
        self,
        input_fn: Callable[[], Sequence[float]],
        target_fn: Callable[..., Sequence[float]],
    ):
        self.input_fn = input_fn
        self.target_fn = target_fn

    def generate_input(self) -> list[float]:
        return list(self.input_fn())

    def generate_target(self, inputs: Sequence[float]) -> list[float]:
        return list(self.target_fn(*inputs))


PROBLEMS: dict[str, Callable[[random.Random | None], Problem]] = {
    "addition": Addition,
    "integer-addition": IntegerAddition,
    "polar": Polar,
}


def get_problem(name: str, rng: random.Random | None = None) -> Problem:
    if name not in PROBLEMS:
        raise ValueError(f"Unknown problem {name!r}, choose one of {', '.join(PROBLEMS)}")
    return PROBLEMS[name](rng)
