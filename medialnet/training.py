import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import tqdm
from matplotlib import pyplot as plt

from nn import InputArityError, NeuralNetwork


@dataclass
class TrainingSummary:
    """
    Average error of one `train` call, compared with the call before it.
    This helps see whether training still improves the network, or if we
    have hit a (possibly local) minimum.
    """

    previous_average_error: float | None
    average_error: float
    errors: list[float] = field(default_factory=list)

    @property
    def verdict(self) -> str | None:
        if self.previous_average_error is None:
            return None
        # Equal averages count as WORSE.
        return "BETTER" if self.average_error < self.previous_average_error else "WORSE"

    def __str__(self):
        if self.verdict is None:
            return f"Average error is now {self.average_error}"
        return (
            f"Average error is {self.verdict} "
            f"({self.previous_average_error} => {self.average_error})"
        )


def train(
    network: NeuralNetwork,
    iterations: int,
    on_iteration: Callable[[int, float], None] | None = None,
    verbose: bool = True,
) -> TrainingSummary:
    """
    Train `network` online for `iterations` samples drawn from its problem.

    `on_iteration` is called with the (1-based) iteration number and the
    euclidean norm of that sample's error vector.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be at least 1, got {iterations}")

    all_errors = []
    iterable = range(1, iterations + 1)
    if verbose:
        iterable = tqdm.tqdm(iterable, total=iterations)

    for iteration in iterable:
        arguments = network.problem.generate_input()
        target_outputs = network.problem.generate_target(arguments)
        inputs = network.inputs_with_bias(arguments)
        actual_outputs = network.compute(inputs)
        if len(target_outputs) != len(actual_outputs):
            raise InputArityError(f"Expected {len(actual_outputs)} targets, got {len(target_outputs)}")
        errors = [target - actual for actual, target in zip(actual_outputs, target_outputs)]

        network.backpropagate(inputs, errors)

        # hypot gives inf rather than raising OverflowError once training diverges.
        overall_error = math.hypot(*errors)
        if verbose:
            iterable.set_postfix(error=overall_error)
        if on_iteration is not None:
            on_iteration(iteration, overall_error)

        all_errors.append(overall_error)
        network.training_iterations += 1

    summary = TrainingSummary(
        previous_average_error=network.average_error,
        average_error=sum(all_errors) / len(all_errors),
        errors=all_errors,
    )
    if verbose:
        print(summary)
    network.average_error = summary.average_error
    return summary


def plot_errors(errors: list[float], path: Path | None = None, average_every: int = 20):
    """
    Plot the per-iteration errors of a training run, averaged over windows
    of `average_every` iterations. Saved to `path` if given, otherwise shown.
    """
    windows = [errors[i : i + average_every] for i in range(0, len(errors), average_every)]
    averages = [sum(window) / len(window) for window in windows]

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot([i * average_every for i in range(len(averages))], averages)
    ax.set_yscale("log")
    ax.set_xlabel("Training iteration")
    ax.set_ylabel("Error")
    ax.set_title(f"Error averaged over {average_every} iterations")
    plt.tight_layout()

    if path is None:
        plt.show()
    else:
        fig.savefig(path, dpi=150)
    plt.close(fig)
