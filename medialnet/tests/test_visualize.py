import random

from nn import NeuralNetwork
from problems import Addition, Polar
from visualize import network_graph


def test_network_graph():
    network = NeuralNetwork(Polar(), number_of_medial_neurons=3, rng=random.Random(0))
    source = network_graph(network).source

    for name in ["x_0", "x_1", "bias", "h_0", "h_2", "y_0", "y_1"]:
        assert name in source
    assert "x_2" not in source
    assert source.count("->") == 3 * 3 + 3 * 2
    assert f"{network.syn_one[0][0]:.4f}" in source


def test_network_graph_without_bias():
    network = NeuralNetwork(Addition(), bias_value=None, number_of_medial_neurons=2)
    source = network_graph(network).source
    assert "bias" not in source
    assert source.count("->") == 2 * 2 + 2 * 1
