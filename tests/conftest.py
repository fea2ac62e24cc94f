import sys

import pytest

from kappa.builtin.env_builtin import standard_env
from kappa.interpreter import Interpreter


@pytest.fixture
def interp():
    """A fresh interpreter (root environment with builtins) for each test."""
    return Interpreter()


@pytest.fixture
def env():
    """A fresh root environment seeded with the builtins."""
    return standard_env()


@pytest.fixture
def int_digit_limit():
    """Pin the host's integer/string conversion limit to its default of 4300 digits."""
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("interpreter has no integer string conversion limit")
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(previous)
