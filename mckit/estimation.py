"""Empirical estimation of discrete- and continuous-time Markov chains.

All matrices follow the row convention: the row index is the source state
and the column index is the destination state. States for which there is
no evidence (no outgoing transitions for the Perron-Frobenius matrix, no
visits for the generator) get a row of zeros rather than an error.

"""

import logging
import numpy as np
from mckit.counting import TransitionStatistics, aggregate, count_matrix

log = logging.getLogger(__name__)


def perron_frobenius_from_counts(count_matrix):
    r"""Normalize a transition count matrix.

    Parameters
    ----------
    count_matrix : (M, M) array_like
        Transition counts, with source states as rows.

    Returns
    -------
    (M, M) ndarray
        The Perron-Frobenius (transition) matrix :math:`P`.

    Notes
    -----
    For every state :math:`i` with :math:`N_i=\sum_j N_{ij}>0`, the
    estimate is :math:`P_{ij}=N_{ij}/N_i`. Rows of states with no observed
    outgoing transitions are left equal to zero, so :math:`P` is row
    stochastic only on the observed sources.

    """
    C = np.asarray(count_matrix, dtype=float)
    totals = C.sum(axis=1)
    P = np.zeros_like(C)
    np.divide(C, totals[:, np.newaxis], out=P,
              where=totals[:, np.newaxis] > 0)
    degenerate = np.flatnonzero(totals == 0)
    if len(degenerate):
        log.debug('states without outgoing transitions: %s',
                  degenerate.tolist())
    return P


def perron_frobenius(dtraj, n_states=None):
    """Estimate the Perron-Frobenius matrix of a discrete trajectory.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.

    Returns
    -------
    (M, M) ndarray
        One-step transition probabilities. See
        :func:`perron_frobenius_from_counts`.

    """
    return perron_frobenius_from_counts(count_matrix(dtraj, n_states))


def generator_from_statistics(statistics):
    r"""Estimate a generator matrix from transition statistics.

    Parameters
    ----------
    statistics : TransitionStatistics
        Transition counts and holding times.

    Returns
    -------
    (M, M) ndarray
        The generator (rate) matrix :math:`Q`, whose rows sum to zero.

    Notes
    -----
    For a state :math:`i` with :math:`n_i` observed runs of mean length
    :math:`\bar\tau_i`, the off-diagonal rates are

    .. math:: Q_{ij} = \frac{N_{ij}}{\bar\tau_i n_i}, \quad j\neq i,

    and the diagonal is the residual :math:`Q_{ii}=-\sum_{j\neq i}Q_{ij}`.
    Rows of unvisited states are left equal to zero.

    """
    if not isinstance(statistics, TransitionStatistics):
        cls = TransitionStatistics
        raise TypeError(f'statistics must be of type {cls.__name__}')

    C = statistics.count_matrix.astype(float)
    np.fill_diagonal(C, 0)
    visits = statistics.visits
    exposure = statistics.mean_holding_times * visits
    visited = visits > 0

    Q = np.zeros_like(C)
    Q[visited] = C[visited] / exposure[visited, np.newaxis]
    Q[np.diag_indices_from(Q)] -= Q.sum(axis=1)

    if not visited.all():
        log.debug('unvisited states: %s', np.flatnonzero(~visited).tolist())
    return Q


def generator(dtraj, dt=None, n_states=None):
    """Estimate the generator matrix of a discrete trajectory.

    Parameters
    ----------
    dtraj : DiscreteTrajectory or (T,) array_like of int
        The trajectory.
    dt : positive float, optional
        Time step. Default is 1 (or the time step of `dtraj`).
    n_states : int, optional
        Number of states. Defaults to one plus the largest label.

    Returns
    -------
    (M, M) ndarray
        Transition rates. See :func:`generator_from_statistics`.

    """
    return generator_from_statistics(aggregate(dtraj, n_states, dt))
