import os

import cv2
import numpy as np
import pytest

import train_hog

WIN = (64, 96)


def person_image(rng, size=WIN):
    # dark noise with a bright upright blob roughly shaped like a pedestrian
    w, h = size
    img = rng.integers(0, 40, (h, w, 3), dtype=np.uint8)
    cv2.ellipse(img, (w // 2, h // 2 + 8), (w // 6, h // 3), 0, 0, 360, (230, 230, 230), -1)
    cv2.circle(img, (w // 2, h // 6), w // 10, (230, 230, 230), -1)
    return img


def background_image(rng, w=160, h=200):
    return rng.integers(0, 256, (h, w, 3), dtype=np.uint8)


def write_images(folder, images, ext='.png'):
    os.makedirs(folder, exist_ok=True)
    paths = []
    for i, img in enumerate(images):
        path = os.path.join(str(folder), '%03d%s' % (i, ext))
        assert cv2.imwrite(path, img)
        paths.append(path)
    return paths


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def pos_images(rng):
    return [person_image(rng) for _ in range(8)]


@pytest.fixture
def neg_images(rng):
    return [background_image(rng) for _ in range(8)]


@pytest.fixture
def trained_model(tmp_path, pos_images, neg_images):
    model_path = str(tmp_path / 'detector.yml')
    gradient_lst = train_hog.compute_hog(pos_images, WIN)
    n_pos = len(gradient_lst)
    gradient_lst += train_hog.compute_hog(train_hog.sample_neg(neg_images, WIN, 32), WIN)
    labels = [1] * n_pos + [-1] * (len(gradient_lst) - n_pos)
    svm = train_hog.train_svm(gradient_lst, labels, model_path)
    return svm, model_path
