import numpy as np
import pytest

from mckit.ctmc import ContinuousTimeMarkovChain, jump_matrix


@pytest.fixture
def chain():
    return ContinuousTimeMarkovChain([[-1., 1.], [2., -2.]])


def test_properties(chain):
    assert chain.n_states == 2
    np.testing.assert_allclose(chain.jump_rates, [1., 2.])
    np.testing.assert_allclose(chain.mean_holding_times, [1., .5])
    np.testing.assert_allclose(chain.jump_matrix, [[0., 1.], [1., 0.]])


def test_transition_matrix(chain):
    np.testing.assert_allclose(chain.transition_matrix(0.), np.eye(2))
    P = chain.transition_matrix(0.7)
    np.testing.assert_allclose(P.sum(axis=1), 1.)
    assert (P >= 0).all()
    # two-state chain relaxes at rate k12 + k21
    expected = 2 / 3 + 1 / 3 * np.exp(-3 * 0.7)
    assert P[0, 0] == pytest.approx(expected)
    with pytest.raises(ValueError):
        chain.transition_matrix(-1.)


def test_absorbing_state():
    chain = ContinuousTimeMarkovChain([[-.5, .5, 0], [0, 0, 0], [0, 0, 0]])
    np.testing.assert_allclose(chain.mean_holding_times, [2., np.inf, np.inf])
    np.testing.assert_allclose(chain.jump_matrix,
                               [[0, 1, 0], [0, 0, 0], [0, 0, 0]])
    np.testing.assert_allclose(chain.transition_matrix(5.)[1], [0, 1, 0])


@pytest.mark.parametrize('matrix', [
    [[1., -1.], [2., -2.]],
    [[-1., 2.], [2., -2.]],
    [[-1., 1., 0.], [0., 0., 0.]],
])
def test_invalid_rate_matrix(matrix):
    with pytest.raises(ValueError):
        ContinuousTimeMarkovChain(matrix)
    with pytest.raises(ValueError):
        jump_matrix(matrix)
