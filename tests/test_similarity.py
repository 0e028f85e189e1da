import numpy as np
import pytest
from palettegen.metrics.similarity import euclidean, pairwise_distances

def test_euclidean():
    assert euclidean((0, 0, 0), (3, 4, 0)) == pytest.approx(5.0)
    assert euclidean(np.array([255, 255, 255], dtype=np.uint8), (255, 255, 255)) == 0.0
    # no uint8 wraparound
    assert euclidean(np.array([0, 0, 0], dtype=np.uint8), np.array([255, 0, 0], dtype=np.uint8)) == 255.0

def test_pairwise_matches_euclidean():
    px = np.array([[0, 0, 0], [10, 20, 30], [255, 255, 255]], dtype=np.uint8)
    cents = np.array([[0, 0, 0], [255, 0, 0]], dtype=np.float64)
    d = pairwise_distances(px, cents)
    assert d.shape == (3, 2)
    for i in range(3):
        for j in range(2):
            assert d[i, j] == pytest.approx(euclidean(px[i], cents[j]))
