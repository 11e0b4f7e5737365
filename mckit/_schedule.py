import collections.abc
import numpy as np


class Schedule(collections.abc.Sequence):
    """A 'schedule' as defined at https://ncatlab.org/nlab/show/schedule

    Here a schedule is the run-length encoding of a discrete trajectory:
    a sequence of (state, holding time) pairs in which consecutive states
    differ.

    """

    def __init__(self, labels=None, lengths=None):
        labels = [] if labels is None else list(labels)
        lengths = [] if lengths is None else list(lengths)
        assert len(labels) == len(lengths)
        assert all(t >= 0 for t in lengths)
        self.labels = labels
        self.lengths = lengths

    @classmethod
    def from_trajectory(cls, dtraj, dt=1.):
        """Segment a trajectory into maximal runs of a single state.

        Parameters
        ----------
        dtraj : (T,) array_like
            Sequence of state labels.
        dt : positive float, optional
            Time between consecutive samples. Default is 1.

        Returns
        -------
        Schedule
            Runs of `dtraj`, with lengths given in units of time.

        """
        dtraj = np.asarray(dtraj)
        if len(dtraj) == 0:
            return cls()
        starts = np.flatnonzero(dtraj[1:] != dtraj[:-1]) + 1
        starts = np.insert(starts, 0, 0)
        run_lengths = np.diff(np.append(starts, len(dtraj)))
        return cls(dtraj[starts].tolist(), (run_lengths * dt).tolist())

    def __len__(self):
        return len(self.labels)

    def __getitem__(self, key):
        if isinstance(key, int):
            return (self.labels[key], self.lengths[key])
        return Schedule(self.labels[key], self.lengths[key])
