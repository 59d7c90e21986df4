# -*- encoding: utf-8 -*-
'''
@File    :   config.py
@Time    :   2026/10/12 10:02:41
@Version :   1.0
@Desc    :   缓存提取与HOG训练程序的默认配置
'''
import os


class CacheConfig:
    CACHE_DIR = os.getenv(
        "HOG_CACHE_DIR",
        os.path.join(os.path.expanduser("~"), "AppData", "Local", "Mozilla", "Firefox",
                     "Profiles", "default", "cache2", "entries"))
    OUTPUT_DIR = os.getenv("HOG_CACHE_OUT", os.path.join("img", "cache"))
    MIN_SIZE = int(os.getenv("HOG_CACHE_MIN_SIZE", "256"))
    SUFFIX = ".png"


class TrainConfig:
    MODEL_PATH = os.getenv("HOG_MODEL_PATH", "my_people_detector.yml")
    WIN_WIDTH = 64
    WIN_HEIGHT = 96
    NEG_STEPS = 0
    TEST_SAMPLES = 100
    HIT_THRESHOLD = 0.004
    CAMERA = int(os.getenv("HOG_CAMERA", "0"))
    WAIT_MS = 5000
    ESC = 27


class HogConfig:
    BLOCK_SIZE = (16, 16)
    BLOCK_STRIDE = (8, 8)
    CELL_SIZE = (8, 8)
    NBINS = 9
    WIN_STRIDE = (8, 8)
    PADDING = (0, 0)


class SvmConfig:
    C = 0.01  # soft classifier, from the Dalal-Triggs paper
    P = 0.1
    MAX_ITER = 1000
    EPS = 1e-3
