import numpy as np
from palettegen.quantization.markers import locate_markers

def test_base_entry_is_not_searched():
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    img[2, 3] = (255, 0, 0)
    cents = np.array([[255, 0, 0], [255, 0, 0]], dtype=np.float64)
    coords = locate_markers(cents, img, (4, 4), (1, 1))
    assert coords[0] == (1, 1)
    assert coords[1] == (3, 2)

def test_first_minimum_in_row_major_order():
    img = np.zeros((3, 3, 3), dtype=np.uint8)
    img[1, 2] = (10, 10, 10)
    img[2, 0] = (10, 10, 10)
    cents = np.array([[0, 0, 0], [10, 10, 10]], dtype=np.float64)
    assert locate_markers(cents, img, (3, 3), (0, 0))[1] == (2, 1)

def test_coords_scaled_back_to_original():
    # 2x4 original enlarged 100x -> 200x400 working buffer
    working = np.zeros((200, 400, 3), dtype=np.uint8)
    working[100:, 300:] = (0, 255, 0)
    cents = np.array([[0, 0, 0], [0, 255, 0]], dtype=np.float64)
    coords = locate_markers(cents, working, (2, 4), (0, 0))
    assert coords[1] == (3, 1)

def test_no_centroids_no_markers():
    img = np.zeros((2, 2, 3), dtype=np.uint8)
    assert locate_markers(np.empty((0, 3)), img, (2, 2), (0, 0)) == []
