import random

import pytest

from nn import InputArityError
from persistence import PersistenceError
from problems import Addition
from session import training_session
from training import train


def test_saves_on_exit(tmp_path):
    path = tmp_path / "addition.json"
    with training_session(path, Addition(random.Random(0))) as network:
        train(network, 5, verbose=False)
        assert not path.exists()
    assert path.exists()


def test_saves_when_body_raises(tmp_path):
    path = tmp_path / "addition.json"
    with pytest.raises(InputArityError):
        with training_session(path, Addition()) as network:
            train(network, 3, verbose=False)
            network.compute([1.0])
    assert path.exists()


def test_resumes_from_file(tmp_path):
    path = tmp_path / "addition.json"
    with training_session(path, Addition(), number_of_medial_neurons=5) as network:
        summary = train(network, 4, verbose=False)
        syn_two = [list(row) for row in network.syn_two]

    with training_session(path, Addition(), number_of_medial_neurons=40) as network:
        assert network.number_of_medial_neurons == 5
        assert network.training_iterations == 4
        assert network.average_error == summary.average_error
        assert network.syn_two == syn_two
        train(network, 4, verbose=False)

    with training_session(path, Addition()) as network:
        assert network.training_iterations == 8


def test_corrupt_file_is_not_overwritten(tmp_path):
    path = tmp_path / "addition.json"
    path.write_text("corrupt")
    with pytest.raises(PersistenceError):
        with training_session(path, Addition()):
            pass
    assert path.read_text() == "corrupt"


def test_unwritable_path(tmp_path):
    with pytest.raises(PersistenceError):
        with training_session(tmp_path / "nodir" / "addition.json", Addition()) as network:
            train(network, 2, verbose=False)


def test_without_path():
    with training_session(None, Addition(), learning_rate=0.2) as network:
        assert network.learning_rate == 0.2
