import numpy as np
import pytest

from mckit.ctmc import ContinuousTimeMarkovChain
from mckit.estimation import generator, perron_frobenius
from mckit.estimator import MarkovChainEstimator
from mckit.exceptions import MalformedInputError
from mckit.trajectory import DiscreteTrajectory


class TestMarkovChainEstimator:

    def test_properties(self):
        estimator = MarkovChainEstimator(dt=0.5, n_states=3, n_jobs=None)
        assert estimator.dt == 0.5
        assert estimator.n_states == 3
        assert estimator.symmetries is None
        assert estimator.n_jobs is None

    @pytest.mark.parametrize('kwargs, error', [
        ({'dt': 0}, MalformedInputError),
        ({'dt': 'a'}, TypeError),
        ({'n_states': -1}, MalformedInputError),
        ({'n_states': 1.5}, TypeError),
        ({'n_jobs': 0}, ValueError),
        ({'n_jobs': -2}, ValueError),
        ({'n_jobs': 2.}, TypeError),
    ])
    def test_invalid_parameters(self, kwargs, error):
        with pytest.raises(error):
            MarkovChainEstimator(**kwargs)

    def test_fit(self, example_dtraj):
        estimator = MarkovChainEstimator(dt=0.5)
        assert estimator.fit(example_dtraj) is estimator
        np.testing.assert_array_equal(estimator.count_matrix_,
                                      [[1, 2], [2, 2]])
        np.testing.assert_allclose(estimator.holding_times_[1], [.5, 1.5])
        np.testing.assert_allclose(estimator.perron_frobenius(),
                                   perron_frobenius(example_dtraj))
        np.testing.assert_allclose(estimator.generator(),
                                   generator(example_dtraj, dt=0.5))

    def test_fit_overrides_trajectory_dt(self, example_dtraj):
        dtraj = DiscreteTrajectory(example_dtraj, dt=10.)
        estimator = MarkovChainEstimator(dt=0.5).fit(dtraj)
        np.testing.assert_allclose(estimator.generator(),
                                   [[-1., 1.], [1., -1.]])

    def test_fit_with_n_states(self, example_dtraj):
        estimator = MarkovChainEstimator(n_states=4).fit(example_dtraj)
        assert estimator.count_matrix_.shape == (4, 4)
        np.testing.assert_array_equal(estimator.generator()[2:], 0.)

    def test_fit_with_symmetries(self, example_dtraj):
        estimator = MarkovChainEstimator(symmetries=[[1, 0]], n_jobs=2)
        estimator.fit(example_dtraj)
        np.testing.assert_array_equal(estimator.count_matrix_,
                                      [[3, 4], [4, 3]])
        np.testing.assert_allclose(estimator.perron_frobenius(),
                                   [[3 / 7, 4 / 7], [4 / 7, 3 / 7]])

    def test_fetch_model(self, example_dtraj):
        estimator = MarkovChainEstimator().fit(example_dtraj)
        model = estimator.fetch_model()
        assert isinstance(model, ContinuousTimeMarkovChain)
        np.testing.assert_allclose(model.rate_matrix, estimator.generator())
        np.testing.assert_allclose(model.mean_holding_times, [2., 2.])

    def test_fetch_model_with_unvisited_states(self):
        model = MarkovChainEstimator(n_states=3).fit([2, 2, 2]).fetch_model()
        np.testing.assert_array_equal(model.rate_matrix, np.zeros((3, 3)))
        np.testing.assert_array_equal(model.mean_holding_times, np.inf)
        np.testing.assert_allclose(model.transition_matrix(1.), np.eye(3))
        np.testing.assert_array_equal(model.jump_matrix, np.zeros((3, 3)))
        assert not hasattr(model, 'stationary_distribution')

    def test_fetch_model_with_terminal_state(self):
        model = MarkovChainEstimator().fit([0, 0, 1, 1, 2]).fetch_model()
        np.testing.assert_allclose(model.jump_rates, [.5, .5, 0.])
        P = model.transition_matrix(2.)
        np.testing.assert_allclose(P.sum(axis=1), 1.)
        np.testing.assert_allclose(P[2], [0., 0., 1.])

    def test_not_fitted(self):
        estimator = MarkovChainEstimator()
        with pytest.raises(RuntimeError):
            estimator.generator()
        with pytest.raises(RuntimeError):
            estimator.perron_frobenius()
