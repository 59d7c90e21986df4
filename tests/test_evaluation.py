import pytest

from evaluation import DetectionScore, corner_distance, rect_iou, score_locations


def test_corner_distance():
    assert corner_distance((10.0, 10.0, 64.0, 96.0), (10.0, 10.0, 64.0, 96.0)) == 0
    # both corners moved by (3, 4)
    assert corner_distance((10.0, 10.0, 64.0, 96.0), (13.0, 14.0, 64.0, 96.0)) == pytest.approx(10.0)


def test_rect_iou():
    assert rect_iou((0.0, 0.0, 10.0, 10.0), (0.0, 0.0, 10.0, 10.0)) == pytest.approx(1.0)
    assert rect_iou((0.0, 0.0, 10.0, 10.0), (20.0, 20.0, 10.0, 10.0)) == 0
    assert rect_iou((0.0, 0.0, 10.0, 10.0), (5.0, 0.0, 10.0, 10.0)) == pytest.approx(50.0 / 150.0)


def test_score_locations_counts_hits():
    box = (10, 10, 64, 96)
    locations = [(10, 10, 64, 96), (12, 11, 64, 96), (300, 300, 64, 96)]

    score = score_locations(box, locations)
    assert score.hits == 2
    assert score.total == 3
    assert score.min_d == 0
    assert score.max_d > 64 * 96 / 20
    assert score.best_iou == pytest.approx(1.0)


def test_score_locations_without_detections():
    assert score_locations((0, 0, 64, 96), []) == DetectionScore(0, 0, 99999.0, 0.0, 0.0)


def test_score_locations_hit_limit_is_integer_area_fraction():
    # 64 * 96 // 20 == 307; both corners shifted by 153.55 gives d == 307.1
    box = (0, 0, 64, 96)
    assert score_locations(box, [(153.55, 0, 64, 96)]).hits == 0
    assert score_locations(box, [(153.45, 0, 64, 96)]).hits == 1
