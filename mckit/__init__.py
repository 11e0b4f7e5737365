"""Empirical estimators for finite-state Markov chains."""

from mckit.exceptions import MalformedInputError, SymmetryMismatchError
from mckit.trajectory import DiscreteTrajectory
from mckit.counting import (TransitionStatistics, aggregate, count_matrix,
                            holding_times)
from mckit.estimation import (generator, generator_from_statistics,
                              perron_frobenius, perron_frobenius_from_counts)
from mckit.symmetry import (Permutation, SymmetryGroup, pooled_statistics,
                            symmetric_generator, symmetric_perron_frobenius)
from mckit.ctmc import ContinuousTimeMarkovChain
from mckit.estimator import MarkovChainEstimator
