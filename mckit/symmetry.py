"""Symmetry-pooled estimation of Markov chains.

If the dynamics of a Markov chain are invariant under a relabeling of its
states, then every relabeled copy of an observed trajectory is as good as
the original. Pooling the raw statistics of all copies before normalizing
them reduces the variance of the estimators in :mod:`mckit.estimation`.

"""

import functools
import logging
import operator
from multiprocessing.pool import ThreadPool
import numpy as np
from deeptime.util.parallel import handle_n_jobs, joining
from mckit.counting import aggregate
from mckit.estimation import (generator_from_statistics,
                              perron_frobenius_from_counts)
from mckit.exceptions import SymmetryMismatchError
from mckit.trajectory import as_trajectory

log = logging.getLogger(__name__)


class Permutation:
    """A relabeling of the states ``0, ..., M-1``.

    Parameters
    ----------
    mapping : (M,) array_like of int or dict
        The image of each state. A dict must have keys ``0, ..., M-1``.
        The values must be a rearrangement of ``0, ..., M-1``.

    """

    def __init__(self, mapping):
        if isinstance(mapping, dict):
            if set(mapping) != set(range(len(mapping))):
                msg = 'mapping table must cover the states 0, ..., M-1'
                raise SymmetryMismatchError(msg)
            mapping = [mapping[i] for i in range(len(mapping))]
        mapping = np.array(mapping)
        if mapping.ndim != 1 or len(mapping) == 0:
            msg = 'permutation must be a nonempty sequence of labels'
            raise SymmetryMismatchError(msg)
        if not np.issubdtype(mapping.dtype, np.integer):
            raise SymmetryMismatchError('permutation must map to integers')
        if not np.array_equal(np.sort(mapping), np.arange(len(mapping))):
            msg = f'{mapping.tolist()} is not a permutation of the states'
            raise SymmetryMismatchError(msg)
        mapping.setflags(write=False)
        self._mapping = mapping

    @classmethod
    def from_callable(cls, func, n_states):
        """Tabulate a relabeling function.

        Parameters
        ----------
        func : callable
            Function mapping each state label to a state label.
        n_states : int
            The number of states.

        Returns
        -------
        Permutation

        """
        image = [func(i) for i in range(n_states)]
        if any(not isinstance(a, (int, np.integer)) for a in image):
            raise SymmetryMismatchError('relabeling must map to integers')
        if any(not 0 <= a < n_states for a in image):
            msg = f'relabeling maps outside the range of {n_states} states'
            raise SymmetryMismatchError(msg)
        return cls(image)

    @classmethod
    def identity(cls, n_states):
        """Return the identity relabeling on `n_states` states."""
        return cls(np.arange(n_states))

    @property
    def mapping(self):
        """(M,) ndarray of int: Image of each state (read-only)."""
        return self._mapping

    @property
    def n_states(self):
        """int: The number of states."""
        return len(self._mapping)

    @property
    def is_identity(self):
        """bool: Whether every state is mapped to itself."""
        return np.array_equal(self._mapping, np.arange(self.n_states))

    def __call__(self, state):
        return self._mapping[state]

    def __eq__(self, other):
        if not isinstance(other, Permutation):
            return NotImplemented
        return np.array_equal(self._mapping, other.mapping)

    def __hash__(self):
        return hash(tuple(self._mapping.tolist()))

    def __repr__(self):
        return f'{self.__class__.__name__}({self._mapping.tolist()})'


class SymmetryGroup:
    """A validated collection of state relabelings.

    Parameters
    ----------
    symmetries : iterable
        Relabelings, each given as a :class:`Permutation`, an array or
        mapping table accepted by :class:`Permutation`, or a callable
        on state labels.
    n_states : int
        The number of states.

    Notes
    -----
    The identity is included if it is not among `symmetries`, so an
    empty collection is equivalent to no symmetry at all. Every element
    is checked to be a bijection of ``range(n_states)`` onto itself
    before any data is touched; a :class:`SymmetryMismatchError` is
    raised otherwise.

    """

    def __init__(self, symmetries, n_states):
        if n_states <= 0:
            raise SymmetryMismatchError('number of states must be positive')
        elements = [self._as_permutation(s, n_states) for s in symmetries]
        if not any(s.is_identity for s in elements):
            elements.insert(0, Permutation.identity(n_states))
        self._elements = tuple(elements)
        self._n_states = n_states

    @staticmethod
    def _as_permutation(value, n_states):
        if isinstance(value, Permutation):
            permutation = value
        elif callable(value):
            permutation = Permutation.from_callable(value, n_states)
        else:
            permutation = Permutation(value)
        if permutation.n_states != n_states:
            msg = (f'relabeling of {permutation.n_states} states is '
                   f'incompatible with {n_states} states')
            raise SymmetryMismatchError(msg)
        return permutation

    @property
    def n_states(self):
        """int: The number of states."""
        return self._n_states

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(self._elements)

    def __getitem__(self, key):
        return self._elements[key]

    def __repr__(self):
        return f'{self.__class__.__name__}({list(self._elements)})'


def pooled_statistics(dtraj, symmetries, n_states=None, dt=None, n_jobs=1):
    """Aggregate statistics over all relabeled copies of a trajectory.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    symmetries : SymmetryGroup or iterable
        The relabelings (see :class:`SymmetryGroup`).
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.
    dt : positive float, optional
        Time step. Default is 1 (or the time step of `dtraj`).
    n_jobs : int or None, optional
        Number of threads. Default is 1; None means one per CPU.

    Returns
    -------
    TransitionStatistics
        Sum of the transition counts, and concatenation of the holding
        times, over all relabeled copies of `dtraj`.

    See Also
    --------
    :meth:`mckit.counting.TransitionStatistics.pool`
        Used to combine the statistics of the relabeled copies.

    """
    dtraj = as_trajectory(dtraj, n_states=n_states, dt=dt)
    if isinstance(symmetries, SymmetryGroup):
        if symmetries.n_states != dtraj.n_states:
            msg = (f'symmetry group on {symmetries.n_states} states is '
                   f'incompatible with {dtraj.n_states} states')
            raise SymmetryMismatchError(msg)
        group = symmetries
    else:
        group = SymmetryGroup(symmetries, dtraj.n_states)
    n_jobs = handle_n_jobs(n_jobs)

    copies = [dtraj.relabel(s.mapping) for s in group]
    if n_jobs == 1 or len(copies) == 1:
        statistics = [aggregate(x) for x in copies]
    else:
        with joining(ThreadPool(processes=min(n_jobs, len(copies)))) as pool:
            statistics = pool.map(aggregate, copies)

    log.debug('pooling statistics of %d relabeled trajectories', len(copies))
    return functools.reduce(operator.add, statistics)


def symmetric_perron_frobenius(dtraj, symmetries, n_states=None, n_jobs=1):
    """Estimate a Perron-Frobenius matrix with symmetry pooling.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    symmetries : SymmetryGroup or iterable
        The relabelings (see :class:`SymmetryGroup`).
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.
    n_jobs : int or None, optional
        Number of threads. Default is 1.

    Returns
    -------
    (M, M) ndarray
        The Perron-Frobenius matrix of the pooled transition counts.

    """
    statistics = pooled_statistics(dtraj, symmetries, n_states=n_states,
                                   n_jobs=n_jobs)
    return perron_frobenius_from_counts(statistics.count_matrix)


def symmetric_generator(dtraj, symmetries, dt=None, n_states=None, n_jobs=1):
    """Estimate a generator matrix with symmetry pooling.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    symmetries : SymmetryGroup or iterable
        The relabelings (see :class:`SymmetryGroup`).
    dt : positive float, optional
        Time step. Default is 1 (or the time step of `dtraj`).
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.
    n_jobs : int or None, optional
        Number of threads. Default is 1.

    Returns
    -------
    (M, M) ndarray
        The generator matrix of the pooled statistics.

    """
    statistics = pooled_statistics(dtraj, symmetries, n_states=n_states,
                                   dt=dt, n_jobs=n_jobs)
    return generator_from_statistics(statistics)
