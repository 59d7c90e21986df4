import numpy as np

import train_hog
from conftest import WIN
from hog_visu import get_hogdescriptor_visu

GREEN = np.array([0, 255, 0], dtype=np.uint8)


def has_green(img):
    return bool(np.any(np.all(img == GREEN, axis=2)))


def test_visu_zooms_and_draws_gradients(pos_images):
    descriptors = train_hog.compute_hog(pos_images[:1], WIN)[0]

    visu = get_hogdescriptor_visu(pos_images[0], descriptors, WIN)

    assert visu.shape == (WIN[1] * 3, WIN[0] * 3, 3)
    assert visu.dtype == np.uint8
    assert has_green(visu)


def test_visu_zero_descriptor_draws_only_grid():
    img = np.zeros((WIN[1], WIN[0]), dtype=np.uint8)
    descriptors = np.zeros(2772, dtype=np.float32)

    visu = get_hogdescriptor_visu(img, descriptors, WIN)

    assert visu.shape == (WIN[1] * 3, WIN[0] * 3, 3)
    assert not has_green(visu)
    assert np.any(visu == 100)
