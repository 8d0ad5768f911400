import numpy as np
import pytest

from eeg_arwt.assembly import assemble_feature_matrix, flatten_block
from eeg_arwt.errors import ShapeMismatch

def coded_block(n_slots, n_channels, n_trials, offset=0):
    """Entry (s, c, t) = offset + 100*t + 10*c + s."""
    s, c, t = np.meshgrid(np.arange(n_slots), np.arange(n_channels), np.arange(n_trials), indexing="ij")
    return (offset + 100 * t + 10 * c + s).astype(float)

class TestFlatten:

    def test_channel_outer_slot_inner(self):
        X = flatten_block(coded_block(3, 2, 4))
        assert X.shape == (4, 6)
        for t in range(4):
            expected = [100 * t + 10 * c + s for c in range(2) for s in range(3)]
            np.testing.assert_array_equal(X[t], expected)

    def test_channel_block_is_contiguous(self):
        block = coded_block(5, 3, 2)
        X = flatten_block(block)
        for c in range(3):
            np.testing.assert_array_equal(X[:, c * 5:(c + 1) * 5], block[:, c, :].T)

    def test_zero_slots(self):
        assert flatten_block(np.empty((0, 3, 2))).shape == (2, 0)

    def test_rejects_2d(self):
        with pytest.raises(ShapeMismatch):
            flatten_block(np.zeros((3, 2)))

class TestAssemble:

    def test_ar_block_first(self):
        ar = coded_block(2, 2, 3)
        wt = coded_block(3, 2, 3, offset=1000)
        X = assemble_feature_matrix(ar, wt)
        assert X.shape == (3, 2 * (2 + 3))
        np.testing.assert_array_equal(X[:, :4], flatten_block(ar))
        np.testing.assert_array_equal(X[:, 4:], flatten_block(wt))
        assert np.all(X[:, :4] < 1000) and np.all(X[:, 4:] >= 1000)

    def test_disabled_block_adds_no_columns(self):
        ar = coded_block(2, 2, 3)
        X = assemble_feature_matrix(ar, np.empty((0, 2, 3)))
        np.testing.assert_array_equal(X, flatten_block(ar))

    def test_both_empty(self):
        X = assemble_feature_matrix(np.empty((0, 2, 3)), np.empty((0, 2, 3)))
        assert X.shape == (3, 0)

    def test_channel_mismatch(self):
        with pytest.raises(ShapeMismatch, match="channels"):
            assemble_feature_matrix(coded_block(2, 2, 3), coded_block(2, 3, 3))

    def test_trial_mismatch(self):
        with pytest.raises(ShapeMismatch):
            assemble_feature_matrix(coded_block(2, 2, 3), np.empty((0, 2, 4)))

    def test_no_blocks(self):
        with pytest.raises(ShapeMismatch):
            assemble_feature_matrix()
