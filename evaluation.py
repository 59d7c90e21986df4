# -*- encoding: utf-8 -*-
'''
@File    :   evaluation.py
@Time    :   2026/10/13 15:20:12
@Version :   1.0
@Desc    :   合成测试中检测框与真值框的比对
'''
from collections import namedtuple

import numpy as np
from numba import jit

DetectionScore = namedtuple('DetectionScore', ['hits', 'total', 'min_d', 'max_d', 'best_iou'])


@jit(nopython=True)
def corner_distance(A, B) -> float:
    # A, B: (x, y, w, h)
    d1x = A[0] - B[0]
    d1y = A[1] - B[1]
    d2x = (A[0] + A[2]) - (B[0] + B[2])
    d2y = (A[1] + A[3]) - (B[1] + B[3])
    return np.sqrt(d1x * d1x + d1y * d1y) + np.sqrt(d2x * d2x + d2y * d2y)


@jit(nopython=True)
def rect_iou(A, B) -> float:
    xA = max(A[0], B[0])
    yA = max(A[1], B[1])
    xB = min(A[0] + A[2], B[0] + B[2])
    yB = min(A[1] + A[3], B[1] + B[3])

    # compute the area of intersection rectangle
    interArea = max(0.0, xB - xA) * max(0.0, yB - yA)
    if interArea == 0:
        return 0.0

    union = A[2] * A[3] + B[2] * B[3] - interArea
    return interArea / float(union)


def score_locations(box, locations):
    """
    统计检测结果中的真正例。
    左上角与右下角的距离之和小于真值框面积整除20的值即视为命中。
    :param box: 真值框 (x, y, w, h)
    :param locations: detectMultiScale 返回的检测框
    :return: DetectionScore
    """
    box = tuple(float(v) for v in box)
    limit = int(box[2] * box[3]) // 20
    hits = 0
    min_d = 99999.0
    max_d = 0.0
    best_iou = 0.0
    for loc in locations:
        loc = tuple(float(v) for v in loc)
        d = corner_distance(box, loc)
        hits += int(d < limit)
        min_d = min(min_d, d)
        max_d = max(max_d, d)
        best_iou = max(best_iou, rect_iou(box, loc))
    return DetectionScore(hits, len(locations), min_d, max_d, best_iou)
