import os

import pytest

tomllib = pytest.importorskip('tomllib')

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def load_project():
    with open(os.path.join(ROOT, 'pyproject.toml'), 'rb') as f:
        return tomllib.load(f)['project']


def test_opencv_pinned_below_5():
    # cv2.HOGDescriptor is not shipped by the 5.x wheels
    deps = [d for d in load_project()['dependencies'] if d.startswith('opencv-python')]
    assert deps == ['opencv-python>=4.5,<5']


def test_no_design_notes_as_readme():
    assert 'readme' not in load_project()
