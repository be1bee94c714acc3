from dataclasses import dataclass
from typing import Sequence

from nn import NeuralNetwork


@dataclass
class Evaluation:
    inputs: list[float]
    outputs: list[float]
    expected: list[float]

    @property
    def difference(self) -> list[float]:
        return [e - r for r, e in zip(self.outputs, self.expected)]


def evaluate(network: NeuralNetwork, inputs: Sequence[float]) -> Evaluation:
    """
    Run the network on raw `inputs` (without the bias neuron), and compare
    with what the network's problem says the outputs should be.
    """
    inputs = list(inputs)
    outputs = network.compute(network.inputs_with_bias(inputs))
    expected = network.problem.generate_target(inputs)
    return Evaluation(inputs=inputs, outputs=outputs, expected=list(expected))


def format_evaluation(evaluation: Evaluation) -> str:
    input_string = f"{evaluation.inputs} => "
    # Right-align the labels with the "=> " of the first line.
    lines = [
        f"{input_string}{evaluation.outputs}",
        f"{' ' * (len(input_string) - 9)}expected {evaluation.expected}",
        f"{' ' * (len(input_string) - 11)}difference {evaluation.difference}",
    ]
    return "\n".join(lines)
