from graphviz import Digraph

from nn import NeuralNetwork


def network_graph(network: NeuralNetwork) -> Digraph:
    """
    Build a graphviz diagram of the network: one node per neuron, and one
    edge per synapse labelled with its weight.
    """
    dot = Digraph(comment="Neural Network", strict=True)
    dot.attr(rankdir="LR")

    input_names = [f"x_{i}" for i in range(network.number_of_inputs)]
    if network.bias_value is not None:
        input_names[-1] = "bias"
    medial_names = [f"h_{j}" for j in range(network.number_of_medial_neurons)]
    output_names = [f"y_{k}" for k in range(network.number_of_outputs)]

    for name in input_names:
        dot.node(name=name, label=name, shape="box")
    for name in medial_names:
        dot.node(name=name, label=f"{name} | tanh")
    for name in output_names:
        dot.node(name=name, label=name, shape="box")

    for i, row in enumerate(network.syn_one):
        for j, weight in enumerate(row):
            dot.edge(input_names[i], medial_names[j], label=f"{weight:.4f}")
    for j, row in enumerate(network.syn_two):
        for k, weight in enumerate(row):
            dot.edge(medial_names[j], output_names[k], label=f"{weight:.4f}")

    return dot


def draw_network(network: NeuralNetwork, filename: str = "network", view: bool = False) -> str:
    """Render the diagram to `filename`.png, returning the rendered path."""
    return network_graph(network).render(filename, format="png", cleanup=True, view=view)
