# pytest specific configuration file containing eg fixtures.
import numpy as np
import pytest


@pytest.fixture
def example_dtraj():
    return np.array([0, 0, 1, 0, 1, 1, 1, 0])


@pytest.fixture(params=[0, 1, 2, 3], ids=lambda x: f'seed{x}')
def random_dtraj(request):
    rng = np.random.default_rng(request.param)
    n_states = 4
    T = rng.dirichlet(np.ones(n_states), size=n_states)
    T += 2 * np.eye(n_states)
    T /= T.sum(axis=1, keepdims=True)
    x = np.zeros(500, dtype=int)
    for t in range(1, len(x)):
        x[t] = rng.choice(n_states, p=T[x[t - 1]])
    return x
