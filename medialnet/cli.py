"""
Train or query a network on one of the built-in problems.

    medialnet -n addition -t 10000      # train for 10000 iterations
    medialnet -n addition 3 4.5         # what does the network say 3 + 4.5 is?

Weights are kept in `<name>.json` (or the file given with -f), and are saved
back whenever the program exits.
"""

import argparse
import random
import sys
from pathlib import Path

from evaluation import evaluate, format_evaluation
from nn import InputArityError
from problems import PROBLEMS, get_problem
from session import training_session
from training import plot_errors, train
from visualize import draw_network


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("inputs", nargs="*", type=float, help="Inputs to evaluate the network on")
    parser.add_argument("-t", "--train", type=int, metavar="ITERATIONS", help="Train for this many iterations")
    parser.add_argument("-n", "--name", default="polar", choices=list(PROBLEMS), help="Problem to learn (default: polar)")
    parser.add_argument("-f", "--file", type=Path, help="Weights file (default: <name>.json)")
    parser.add_argument("-m", "--medial", type=int, default=40, help="Number of medial neurons (default: 40)")
    parser.add_argument("-b", "--bias", dest="bias_value", type=float, default=2.0, help="Bias neuron value (default: 2.0)")
    parser.add_argument("--no-bias", dest="bias_value", action="store_const", const=None, help="Disable the bias neuron")
    parser.add_argument("-r", "--rate", type=float, default=0.01, help="Learning rate (default: 0.01)")
    parser.add_argument("--seed", type=int, help="Seed for sampling and weight initialisation")
    parser.add_argument("--plot", type=Path, metavar="PATH", help="Save a plot of the training errors to PATH")
    parser.add_argument("--draw", type=Path, metavar="PATH", help="Render the network graph to PATH (png)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    path = args.file or Path(f"{args.name}.json")
    rng = random.Random(args.seed)
    problem = get_problem(args.name, rng)

    with training_session(
        path,
        problem,
        bias_value=args.bias_value,
        number_of_medial_neurons=args.medial,
        learning_rate=args.rate,
        rng=rng,
    ) as network:
        if args.train is not None:
            summary = train(network, args.train)
            if args.plot:
                plot_errors(summary.errors, args.plot)
        else:
            try:
                print(format_evaluation(evaluate(network, args.inputs)))
            except InputArityError as e:
                print(f"{e}; maybe you need to provide some inputs as arguments?")

        if args.draw:
            draw_network(network, str(args.draw.with_suffix("")))

    return 0


if __name__ == "__main__":
    sys.exit(main())
