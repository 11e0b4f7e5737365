"""Discrete-state trajectories sampled at a fixed time step."""

import numbers
import numpy as np
from mckit.exceptions import MalformedInputError


class DiscreteTrajectory:
    """A sequence of integer state labels sampled at a fixed time step.

    Parameters
    ----------
    dtraj : (T,) array_like of int
        State labels, each in ``range(n_states)``. Must be nonempty.
    n_states : int, optional
        Size of the state space. Defaults to one plus the largest label
        observed in `dtraj`.
    dt : positive float, optional
        Physical time between consecutive samples. Default is 1.

    Notes
    -----
    A trajectory is immutable: the labels are stored in a read-only copy
    of `dtraj`, and relabeling produces a new trajectory.

    """

    def __init__(self, dtraj, n_states=None, dt=1.):
        self._set_dtraj(dtraj)
        self._set_n_states(n_states)
        self._set_dt(dt)

    @property
    def dtraj(self):
        """(T,) ndarray of int: State labels (read-only)."""
        return self._dtraj

    def _set_dtraj(self, value):
        value = np.array(value)
        if value.ndim != 1:
            raise MalformedInputError('trajectory must be one-dimensional')
        if len(value) == 0:
            raise MalformedInputError('trajectory must not be empty')
        if not np.issubdtype(value.dtype, np.integer):
            raise MalformedInputError('state labels must be integers')
        if value.min() < 0:
            raise MalformedInputError('state labels must be nonnegative')
        value.setflags(write=False)
        self._dtraj = value

    @property
    def n_states(self):
        """int: Number of states."""
        return self._n_states

    def _set_n_states(self, value):
        if value is None:
            value = int(self.dtraj.max()) + 1
        if not isinstance(value, numbers.Integral):
            raise MalformedInputError('number of states must be an integer')
        if value <= 0:
            raise MalformedInputError('number of states must be positive')
        if self.dtraj.max() >= value:
            msg = (f'state label {self.dtraj.max()} is out of range for '
                   f'{value} states')
            raise MalformedInputError(msg)
        self._n_states = int(value)

    @property
    def dt(self):
        """float: Time step between consecutive samples."""
        return self._dt

    def _set_dt(self, value):
        if not isinstance(value, numbers.Real) or not np.isfinite(value):
            raise MalformedInputError('time step must be a finite real number')
        if value <= 0:
            raise MalformedInputError('time step must be positive')
        self._dt = float(value)

    @property
    def duration(self):
        """float: Total elapsed time, ``len(self) * self.dt``."""
        return len(self) * self.dt

    def relabel(self, permutation):
        """Apply a relabeling to every sample.

        Parameters
        ----------
        permutation : (n_states,) array_like of int
            Image of each state label under the relabeling.

        Returns
        -------
        DiscreteTrajectory
            A trajectory with the same length, time step, and number of
            states, whose samples are ``permutation[self.dtraj]``.

        """
        permutation = np.asarray(permutation)
        if permutation.shape != (self.n_states,):
            msg = 'relabeling must assign a label to every state'
            raise MalformedInputError(msg)
        return DiscreteTrajectory(permutation[self.dtraj],
                                  n_states=self.n_states, dt=self.dt)

    def __len__(self):
        return len(self._dtraj)

    def __getitem__(self, key):
        return self._dtraj[key]

    def __iter__(self):
        return iter(self._dtraj)

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._dtraj
        return self._dtraj.astype(dtype)

    def __repr__(self):
        return (f'{self.__class__.__name__}(length={len(self)}, '
                f'n_states={self.n_states}, dt={self.dt})')


def as_trajectory(dtraj, n_states=None, dt=None):
    """Coerce input data to a :class:`DiscreteTrajectory`.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory data.
    n_states : int, optional
        Number of states. Overrides the value carried by `dtraj` if
        provided.
    dt : positive float, optional
        Time step. Overrides the value carried by `dtraj` if provided,
        otherwise defaults to 1 for raw label sequences.

    Returns
    -------
    DiscreteTrajectory

    """
    if isinstance(dtraj, DiscreteTrajectory):
        if n_states is None and dt is None:
            return dtraj
        if n_states is None:
            n_states = dtraj.n_states
        if dt is None:
            dt = dtraj.dt
        return DiscreteTrajectory(dtraj.dtraj, n_states=n_states, dt=dt)
    return DiscreteTrajectory(dtraj, n_states=n_states,
                              dt=1. if dt is None else dt)
