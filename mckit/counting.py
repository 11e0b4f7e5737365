"""Transition counts and holding times of a discrete trajectory."""

import logging
import numpy as np
import deeptime.markov.tools.estimation as estimation
from mckit._schedule import Schedule
from mckit.trajectory import as_trajectory

log = logging.getLogger(__name__)


class TransitionStatistics:
    """Raw statistics of one or more discrete trajectories.

    Parameters
    ----------
    count_matrix : (M, M) array_like of int
        Number of observed one-step transitions from each state (row) to
        each state (column), self-transitions included.
    holding_times : sequence of M array_like
        Durations of the maximal runs of each state, in order of
        occurrence.
    dt : positive float
        Time step of the underlying trajectories.

    """

    def __init__(self, count_matrix, holding_times, dt):
        count_matrix = np.asarray(count_matrix, dtype=int)
        if count_matrix.ndim != 2 or (count_matrix.shape[0]
                                      != count_matrix.shape[1]):
            raise ValueError('count matrix must be square')
        if (count_matrix < 0).any():
            raise ValueError('counts must be nonnegative')
        if len(holding_times) != count_matrix.shape[0]:
            msg = 'number of holding time sequences must match number of states'
            raise ValueError(msg)
        self._count_matrix = count_matrix
        self._holding_times = [np.asarray(t, dtype=float)
                               for t in holding_times]
        self._dt = float(dt)

    @property
    def count_matrix(self):
        """(M, M) ndarray of int: Transition counts."""
        return self._count_matrix

    @property
    def holding_times(self):
        """list of ndarray: Holding times of each state."""
        return self._holding_times

    @property
    def dt(self):
        """float: Time step of the underlying data."""
        return self._dt

    @property
    def n_states(self):
        """int: The number of states."""
        return self._count_matrix.shape[0]

    @property
    def total_count(self):
        """int: Total number of observed transitions."""
        return int(self._count_matrix.sum())

    @property
    def source_counts(self):
        """(M,) ndarray of int: Number of transitions out of each state."""
        return self._count_matrix.sum(axis=1)

    @property
    def visited_sources(self):
        """(M,) ndarray of bool: States observed as a transition source."""
        return self.source_counts > 0

    @property
    def visits(self):
        """(M,) ndarray of int: Number of maximal runs of each state."""
        return np.array([len(t) for t in self._holding_times], dtype=int)

    @property
    def total_times(self):
        """(M,) ndarray: Total time spent in each state."""
        return np.array([t.sum() for t in self._holding_times])

    @property
    def mean_holding_times(self):
        """(M,) ndarray: Mean holding time of each state (NaN if the
        state was never visited)."""
        visits = self.visits
        means = np.full(self.n_states, np.nan)
        np.divide(self.total_times, visits, out=means, where=visits > 0)
        return means

    def pool(self, other):
        """Combine with statistics gathered from independent data.

        Counts are added element-wise and holding times are concatenated
        state by state.

        Parameters
        ----------
        other : TransitionStatistics
            Statistics over the same state space and time step.

        Returns
        -------
        TransitionStatistics
            The pooled statistics.

        """
        if not isinstance(other, TransitionStatistics):
            cls = TransitionStatistics
            raise TypeError(f'can only pool with {cls.__name__}')
        if other.n_states != self.n_states:
            raise ValueError('number of states must match')
        if not np.isclose(other.dt, self.dt):
            raise ValueError('time steps must match')
        holding_times = [np.concatenate([a, b]) for a, b in
                         zip(self._holding_times, other.holding_times)]
        return TransitionStatistics(self._count_matrix + other.count_matrix,
                                    holding_times, self.dt)

    def __add__(self, other):
        return self.pool(other)

    def __repr__(self):
        return (f'{self.__class__.__name__}(n_states={self.n_states}, '
                f'total_count={self.total_count}, dt={self.dt})')


def count_matrix(dtraj, n_states=None):
    """Count the one-step transitions of a discrete trajectory.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.

    Returns
    -------
    (M, M) ndarray of int
        Matrix whose ``(i, j)`` entry is the number of times `dtraj`
        steps from state ``i`` to state ``j``. The entries sum to
        ``len(dtraj) - 1``.

    See Also
    --------
    :func:`deeptime.markov.tools.estimation.count_matrix`
        Low-level function used to count transitions.

    """
    dtraj = as_trajectory(dtraj, n_states=n_states)
    if len(dtraj) < 2:
        return np.zeros((dtraj.n_states, dtraj.n_states), dtype=int)
    C = estimation.count_matrix(dtraj.dtraj, 1, sparse_return=False,
                                nstates=dtraj.n_states)
    return np.asarray(C).astype(int)


def holding_times(dtraj, n_states=None, dt=None):
    """Compute the holding times of each state of a discrete trajectory.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.
    dt : positive float, optional
        Time step. Default is 1 (or the time step of `dtraj`).

    Returns
    -------
    list of ndarray
        For each state, the durations of its maximal runs in `dtraj`, in
        order of occurrence. A run of length ``L`` lasts ``L * dt``.
        States that are never visited have no holding times.

    """
    dtraj = as_trajectory(dtraj, n_states=n_states, dt=dt)
    schedule = Schedule.from_trajectory(dtraj.dtraj, dt=dtraj.dt)
    runs = _group_by_state(schedule, dtraj.n_states)
    return [np.array(times, dtype=float) for times in runs]


def _group_by_state(schedule, n_states):
    """Group the lengths of a schedule by label."""
    runs = [[] for _ in range(n_states)]
    for state, length in schedule:
        runs[state].append(length)
    return runs


def aggregate(dtraj, n_states=None, dt=None):
    """Gather transition counts and holding times in one call.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.
    dt : positive float, optional
        Time step. Default is 1 (or the time step of `dtraj`).

    Returns
    -------
    TransitionStatistics

    """
    dtraj = as_trajectory(dtraj, n_states=n_states, dt=dt)
    stats = TransitionStatistics(count_matrix(dtraj), holding_times(dtraj),
                                 dtraj.dt)
    log.debug('aggregated %d transitions over %d states',
              stats.total_count, stats.n_states)
    return stats
