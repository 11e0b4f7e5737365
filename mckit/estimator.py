"""Estimator object combining counting, symmetry pooling and normalization."""

import numbers
import mckit.ctmc as ctmc
from mckit.counting import aggregate
from mckit.estimation import (generator_from_statistics,
                              perron_frobenius_from_counts)
from mckit.exceptions import MalformedInputError
from mckit.symmetry import pooled_statistics
from mckit.trajectory import as_trajectory


class MarkovChainEstimator:
    """Direct empirical estimation of Markov chains from trajectories.

    Parameters
    ----------
    dt : positive float, default 1.0
        Time between consecutive trajectory samples.
    n_states : int, optional
        Number of states. If not provided, it is inferred from the data
        at fit time.
    symmetries : sequence, optional
        Relabelings of the state space under which the dynamics are
        assumed invariant (see :class:`mckit.symmetry.SymmetryGroup`).
        If provided, statistics are pooled over all relabeled copies of
        the data.
    n_jobs : int or None, default 1
        Number of threads used to aggregate relabeled copies. None means
        one per CPU.

    Examples
    --------
    >>> estimator = MarkovChainEstimator(dt=0.5).fit([0, 0, 1, 0, 1, 1])
    >>> Q = estimator.generator()

    """

    def __init__(self, dt=1., n_states=None, symmetries=None, n_jobs=1):
        self.dt = dt
        self.n_states = n_states
        self.symmetries = symmetries
        self.n_jobs = n_jobs

    @property
    def dt(self):
        """float: Time resolution of the data."""
        return self._dt

    @dt.setter
    def dt(self, value):
        if not isinstance(value, numbers.Real):
            raise TypeError('time step must be a real number')
        if value <= 0:
            raise MalformedInputError('time step must be positive')
        self._dt = float(value)

    @property
    def n_states(self):
        """int or None: Number of states."""
        return self._n_states

    @n_states.setter
    def n_states(self, value):
        if value is not None:
            if not isinstance(value, numbers.Integral):
                raise TypeError('number of states must be an integer')
            if value <= 0:
                raise MalformedInputError('number of states must be positive')
            value = int(value)
        self._n_states = value

    @property
    def symmetries(self):
        """list or None: Symmetry relabelings used for pooling."""
        return self._symmetries

    @symmetries.setter
    def symmetries(self, value):
        self._symmetries = None if value is None else list(value)

    @property
    def n_jobs(self):
        """int or None: Number of threads for symmetry pooling."""
        return self._n_jobs

    @n_jobs.setter
    def n_jobs(self, value):
        if value is not None:
            if (not isinstance(value, numbers.Integral)
                    or isinstance(value, bool)):
                raise TypeError('number of jobs must be an integer')
            if value <= 0:
                raise ValueError('number of jobs must be positive')
            value = int(value)
        self._n_jobs = value

    def fit(self, dtraj):
        """Gather statistics from a trajectory.

        Parameters
        ----------
        dtraj : DiscreteTrajectory or (T,) array_like of int
            The trajectory. Its time step is overridden by :attr:`dt`.

        Returns
        -------
        self : MarkovChainEstimator
            Reference to self.

        """
        dtraj = as_trajectory(dtraj, n_states=self.n_states, dt=self.dt)
        if self.symmetries is None:
            statistics = aggregate(dtraj)
        else:
            statistics = pooled_statistics(dtraj, self.symmetries,
                                           n_jobs=self.n_jobs)

        self.statistics_ = statistics
        self.count_matrix_ = statistics.count_matrix
        self.holding_times_ = statistics.holding_times

        return self

    def perron_frobenius(self):
        """Return the estimated Perron-Frobenius matrix.

        Returns
        -------
        (M, M) ndarray
            See :func:`mckit.estimation.perron_frobenius_from_counts`.

        """
        return perron_frobenius_from_counts(self._fitted().count_matrix)

    def generator(self):
        """Return the estimated generator matrix.

        Returns
        -------
        (M, M) ndarray
            See :func:`mckit.estimation.generator_from_statistics`.

        """
        return generator_from_statistics(self._fitted())

    def fetch_model(self):
        """Return the estimated continuous-time Markov chain.

        Returns
        -------
        ContinuousTimeMarkovChain
            Chain whose rate matrix is :meth:`generator`.

        """
        return ctmc.ContinuousTimeMarkovChain(self.generator())

    def _fitted(self):
        try:
            return self.statistics_
        except AttributeError:
            raise RuntimeError('estimator has not been fit to data') from None
