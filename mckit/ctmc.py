"""Continuous-time Markov chains defined by an estimated generator."""

import numpy as np
import scipy.linalg
import deeptime.markov.tools.analysis as msmana


class ContinuousTimeMarkovChain:
    """A continuous-time Markov chain.

    Parameters
    ----------
    rate_matrix: (M, M) array_like
        A transition rate (infinitesimal generator) matrix, with row sums
        equal to zero. Rows of zeros (absorbing or unobserved states) are
        allowed.

    Notes
    -----
    Estimated generators are frequently reducible (unvisited states,
    terminal states without observed exits), so no stationary
    distribution is attached to the chain.

    """

    def __init__(self, rate_matrix):
        self.rate_matrix = rate_matrix

    @property
    def rate_matrix(self):
        """(M, M) ndarray: Infinitesimal generator matrix."""
        return self._rate_matrix

    @rate_matrix.setter
    def rate_matrix(self, value):
        value = np.asarray(value, dtype=float)
        if not _is_rate_matrix(value):
            raise ValueError('matrix must be row infinitesimal stochastic')
        self._rate_matrix = value

    @property
    def jump_matrix(self):
        """(M, M) ndarray: Transition matrix of the embedded Markov chain."""
        return jump_matrix(self.rate_matrix)

    @property
    def jump_rates(self):
        """(M,) ndarray: Total transition rate out of each state."""
        return -self.rate_matrix.diagonal()

    @property
    def mean_holding_times(self):
        """(M,) ndarray: Reciprocal of self.jump_rates (inf for absorbing
        states)."""
        rates = self.jump_rates
        times = np.full(self.n_states, np.inf)
        np.divide(1., rates, out=times, where=rates > 0)
        return times

    @property
    def n_states(self):
        """int: The number of states."""
        return self.rate_matrix.shape[0]

    def transition_matrix(self, t):
        r"""Transition probabilities over a time interval.

        Parameters
        ----------
        t : nonnegative float
            Length of the time interval.

        Returns
        -------
        (M, M) ndarray
            The row stochastic matrix :math:`\exp(tQ)`, where :math:`Q`
            is the rate matrix.

        """
        if t < 0:
            raise ValueError('time interval must be nonnegative')
        return scipy.linalg.expm(t * self.rate_matrix)


def _is_rate_matrix(K):
    if K.ndim != 2 or K.shape[0] != K.shape[1]:
        return False
    tol = 1e-10 * max(1., np.abs(K).max(initial=0.))
    off_diagonal = K[~np.eye(len(K), dtype=bool)]
    return (msmana.is_rate_matrix(K, tol=tol)
            and not (off_diagonal < -tol).any())


def jump_matrix(rate_matrix):
    """Extract the jump probabilities from a rate matrix.

    Parameters
    ----------
    rate_matrix : (M, M) array_like
        A transition rate matrix, with row sums equal to zero.

    Returns
    -------
    (M, M) ndarray
        The jump matrix (embedded transition matrix) derived from
        `rate_matrix`. Rows of states with zero jump rate are zero.

    """
    rate_matrix = np.asarray(rate_matrix, dtype=float)
    if not _is_rate_matrix(rate_matrix):
        raise ValueError('matrix must be row infinitesimal stochastic')
    jump_rates = -rate_matrix.diagonal()
    jump_matrix = np.zeros_like(rate_matrix)
    np.divide(rate_matrix, jump_rates[:, np.newaxis], out=jump_matrix,
              where=jump_rates[:, np.newaxis] > 0)
    np.fill_diagonal(jump_matrix, 0)
    return jump_matrix
