import pytest

from evaluation import Evaluation, evaluate, format_evaluation
from nn import InputArityError, NeuralNetwork
from problems import Addition


def zero_network(**options):
    network = NeuralNetwork(Addition(), number_of_medial_neurons=4, **options)
    network.syn_one = [[0.0] * 4 for _ in range(network.number_of_inputs)]
    network.syn_two = [[0.0] for _ in range(4)]
    return network


def test_evaluate():
    network = NeuralNetwork(Addition())
    evaluation = evaluate(network, [0.5, 1.25])
    assert evaluation.inputs == [0.5, 1.25]
    assert evaluation.expected == [1.75]
    assert evaluation.outputs == network.compute([0.5, 1.25, 2.0])
    assert evaluation.difference == [1.75 - evaluation.outputs[0]]


def test_evaluate_without_bias():
    evaluation = evaluate(zero_network(bias_value=None), [3.0, 4.0])
    assert evaluation.outputs == [0.0]
    assert evaluation.difference == [7.0]


def test_evaluate_wrong_arity():
    with pytest.raises(InputArityError, match="Expected 3 inputs, got 2"):
        evaluate(NeuralNetwork(Addition()), [1.0])


def test_difference_is_expected_minus_actual():
    evaluation = Evaluation(inputs=[1.0], outputs=[3.0, 1.0], expected=[2.0, 1.5])
    assert evaluation.difference == [-1.0, 0.5]


def test_format_evaluation():
    report = format_evaluation(evaluate(zero_network(), [0.5, 1.25]))
    assert report.split("\n") == [
        "[0.5, 1.25] => [0.0]",
        "      expected [1.75]",
        "    difference [1.75]",
    ]
