# -*- encoding: utf-8 -*-
'''
@File    :   hog_visu.py
@Time    :   2026/10/13 09:47:30
@Version :   1.0
@Desc    :   HOG描述子可视化
'''
import cv2
import numpy as np

from config import HogConfig


def get_hogdescriptor_visu(color_orig_img, descriptor_values, size, zoom_fac=3):
    """
    将HOG描述子画成每个cell内9个方向的梯度线段。
    描述子中block按x优先排列，每个block内的4个cell依次为
    (0,0)、(0,1)、(1,0)、(1,1)（即(dx, dy)），每个cell含9个bin。
    :param color_orig_img: 计算描述子所用的窗口图像
    :param descriptor_values: 一维描述子
    :param size: 窗口大小 (w, h)
    :param zoom_fac: 放大倍数
    :return: 放大后的可视化图像
    """
    dim_x, dim_y = size
    visu = cv2.resize(color_orig_img, (int(color_orig_img.shape[1] * zoom_fac),
                                       int(color_orig_img.shape[0] * zoom_fac)))
    if visu.ndim == 2:
        visu = cv2.cvtColor(visu, cv2.COLOR_GRAY2BGR)

    cell_size = HogConfig.CELL_SIZE[0]
    bins = HogConfig.NBINS
    rad_range_for_one_bin = np.pi / bins

    cells_x = dim_x // cell_size
    cells_y = dim_y // cell_size
    gradient_strengths = np.zeros((cells_y, cells_x, bins), dtype=np.float32)
    cell_update_counter = np.zeros((cells_y, cells_x), dtype=np.int32)

    # 相邻block重叠，block数 = cell数 - 1
    values = np.asarray(descriptor_values, dtype=np.float32).ravel()
    idx = 0
    for block_x in range(cells_x - 1):
        for block_y in range(cells_y - 1):
            for dx, dy in ((0, 0), (0, 1), (1, 0), (1, 1)):
                cell_x = block_x + dx
                cell_y = block_y + dy
                gradient_strengths[cell_y, cell_x] += values[idx:idx + bins]
                idx += bins
                cell_update_counter[cell_y, cell_x] += 1

    # 重叠block使同一cell被多次累加，取平均
    counts = np.maximum(cell_update_counter, 1)[:, :, None]
    gradient_strengths /= counts

    max_vec_len = cell_size / 2.0
    scale = 2.5  # 仅为了让线段更明显
    for cell_y in range(cells_y):
        for cell_x in range(cells_x):
            draw_x = cell_x * cell_size
            draw_y = cell_y * cell_size
            mx = draw_x + cell_size / 2
            my = draw_y + cell_size / 2

            cv2.rectangle(visu, (int(draw_x * zoom_fac), int(draw_y * zoom_fac)),
                          (int((draw_x + cell_size) * zoom_fac), int((draw_y + cell_size) * zoom_fac)),
                          (100, 100, 100), 1)

            for b in range(bins):
                strength = gradient_strengths[cell_y, cell_x, b]
                if strength == 0:
                    continue
                curr_rad = b * rad_range_for_one_bin + rad_range_for_one_bin / 2
                vx = np.cos(curr_rad) * strength * max_vec_len * scale
                vy = np.sin(curr_rad) * strength * max_vec_len * scale
                x1, y1 = mx - vx, my - vy
                x2, y2 = mx + vx, my + vy
                cv2.line(visu, (int(x1 * zoom_fac), int(y1 * zoom_fac)),
                         (int(x2 * zoom_fac), int(y2 * zoom_fac)), (0, 255, 0), 1)

    return visu
