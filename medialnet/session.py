import contextlib
from pathlib import Path
from typing import Iterator

from nn import NeuralNetwork
from problems import Problem


@contextlib.contextmanager
def training_session(path: Path | None, problem: Problem, **network_options) -> Iterator[NeuralNetwork]:
    """
    Build a network for `problem`, resuming from the weights at `path` if
    that file exists, and save it back to `path` however the block exits.

    Example
    -------
    with training_session(Path("polar.json"), Polar()) as network:
        train(network, 1000)

    If loading fails, the error is raised before the block runs and nothing
    is saved, so a damaged file is never overwritten.
    """
    network = NeuralNetwork(problem, **network_options)
    if path is not None and Path(path).exists():
        network.load(path)

    try:
        yield network
    finally:
        if path is not None:
            network.save(path)
