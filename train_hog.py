# -*- encoding: utf-8 -*-
'''
@File    :   train_hog.py
@Time    :   2026/10/13 11:08:54
@Version :   1.0
@Desc    :   HOG-SVM行人检测器的训练与测试
'''
import argparse
import os
import sys

import cv2
import numpy as np
from tqdm import tqdm

from config import HogConfig, SvmConfig, TrainConfig
from evaluation import score_locations
from hog_visu import get_hogdescriptor_visu
from utils import glob_files


def load_images(pattern, show=False):
    """
    读取匹配通配路径的所有图片，无法解码的文件跳过。
    :param pattern: 如 ~/img/*.png，或一个目录
    :param show: 逐张显示读入的图片（调试用）
    :return: 图片列表
    """
    img_lst = []
    for filename in tqdm(glob_files(pattern, recursive=True), leave=False):
        img = cv2.imread(filename)
        if img is None:
            tqdm.write("invalid image: " + filename)
            continue
        if show:
            cv2.imshow("image", img)
            cv2.waitKey(10)
        img_lst.append(img)
    return img_lst


def mirror_images(img_lst):
    return img_lst + [cv2.flip(img, 1) for img in img_lst]


def crop_window(img, size):
    # 居中裁剪出窗口大小的区域，图片小于窗口时返回None
    w, h = size
    rows, cols = img.shape[:2]
    if cols < w or rows < h:
        return None
    x = (cols - w) // 2
    y = (rows - h) // 2
    return img[y:y + h, x:x + w]


def sample_neg(full_neg_lst, size, neg_steps=0):
    """
    从负例大图中截取窗口大小的负样本。
    :param full_neg_lst: 负例图片
    :param size: 窗口大小 (w, h)
    :param neg_steps: 滑窗步长；为0时每张图只取左上角一个窗口
    :return: 负样本列表
    """
    w, h = size
    neg_lst = []
    for img in full_neg_lst:
        rows, cols = img.shape[:2]
        if cols < w or rows < h:
            print("negative image smaller than window %dx%d, skipped" % (w, h))
            continue
        if neg_steps == 0:
            neg_lst.append(img[0:h, 0:w].copy())
            continue
        for y in range(0, rows - neg_steps - h, neg_steps):
            for x in range(0, cols - neg_steps - w, neg_steps):
                neg_lst.append(img[y:y + h, x:x + w].copy())
    return neg_lst


def window_fits_hog(size):
    # 窗口需能被block按步长整齐覆盖，否则OpenCV计算描述子时会断言失败
    for win, block, stride in zip(size, HogConfig.BLOCK_SIZE, HogConfig.BLOCK_STRIDE):
        if win < block or (win - block) % stride != 0:
            return False
    return True


def create_hog(size):
    return cv2.HOGDescriptor(tuple(size), HogConfig.BLOCK_SIZE, HogConfig.BLOCK_STRIDE,
                             HogConfig.CELL_SIZE, HogConfig.NBINS)


def compute_hog(img_lst, size, show=False):
    """
    计算每张图片窗口区域的HOG特征。
    :param img_lst: 图片列表，大于窗口的图片取中心区域
    :param size: 窗口大小 (w, h)
    :param show: 显示描述子可视化结果（调试用）
    :return: 一维float32特征向量列表，长度均相同
    """
    hog = create_hog(size)
    gradient_lst = []
    for img in tqdm(img_lst, leave=False):
        roi = crop_window(img, size)
        if roi is None:
            tqdm.write("image %dx%d smaller than window, skipped" % (img.shape[1], img.shape[0]))
            continue
        gray = cv2.cvtColor(roi, cv2.COLOR_BGR2GRAY) if roi.ndim == 3 else roi
        descriptors = hog.compute(gray, winStride=HogConfig.WIN_STRIDE, padding=HogConfig.PADDING)
        descriptors = np.asarray(descriptors, dtype=np.float32).ravel().copy()
        gradient_lst.append(descriptors)
        if show:
            cv2.imshow("gradient", get_hogdescriptor_visu(roi.copy(), descriptors, size))
            cv2.waitKey(10)
    return gradient_lst


def convert_to_ml(train_samples):
    """
    将样本转换为OpenCV机器学习模块要求的格式：
    (样本数 x 特征维数) 的float32矩阵，列向量样本会被转置。
    """
    rows = []
    for sample in train_samples:
        sample = np.asarray(sample, dtype=np.float32)
        if sample.ndim == 2 and 1 not in sample.shape:
            raise ValueError("sample must be a row or column vector, got shape %s" % (sample.shape,))
        rows.append(sample.ravel())
    return np.vstack(rows)


def train_svm(gradient_lst, labels, model_path=TrainConfig.MODEL_PATH):
    train_data = convert_to_ml(gradient_lst)

    print("Start training...", end="", flush=True)
    svm = cv2.ml.SVM_create()
    svm.setTermCriteria((cv2.TERM_CRITERIA_MAX_ITER + cv2.TERM_CRITERIA_EPS, SvmConfig.MAX_ITER, SvmConfig.EPS))
    svm.setKernel(cv2.ml.SVM_LINEAR)
    svm.setP(SvmConfig.P)
    svm.setC(SvmConfig.C)
    # 回归而不是分类，detectMultiScale 直接使用回归值作为置信度
    svm.setType(cv2.ml.SVM_EPS_SVR)
    svm.train(train_data, cv2.ml.ROW_SAMPLE, np.asarray(labels, dtype=np.float32))
    print("...[done]")

    svm.save(model_path)
    return svm


def load_svm(model_path=TrainConfig.MODEL_PATH):
    if not os.path.exists(model_path):
        raise IOError("model file not found: " + model_path)
    try:
        svm = cv2.ml.SVM_load(model_path)
    except cv2.error as e:
        raise IOError("unable to read model %s: %s" % (model_path, e))
    if svm is None or not svm.isTrained():
        raise IOError("model file holds no trained SVM: " + model_path)
    return svm


def get_svm_detector(svm):
    """
    将线性SVM转换为HOGDescriptor可用的检测器：支持向量后接 -rho。
    线性核训练后OpenCV会把支持向量压缩为一个，alpha为1。
    """
    sv = svm.getSupportVectors()
    rho, alpha, svidx = svm.getDecisionFunction(0)

    if alpha.size != 1 or svidx.size != 1 or sv.shape[0] != 1:
        raise ValueError("expected one compressed support vector, got %d" % sv.shape[0])
    if float(alpha.ravel()[0]) != 1.0:
        raise ValueError("expected alpha == 1, got %g" % float(alpha.ravel()[0]))
    if sv.dtype != np.float32:
        raise ValueError("support vectors must be float32")

    return np.append(sv[0], -rho).astype(np.float32)


def draw_locations(img, locations, color):
    for (x, y, w, h) in locations:
        cv2.rectangle(img, (int(x), int(y)), (int(x + w), int(y + h)), color, 2)
    return img


def test_it(size, pos_lst, full_neg_lst, n, model_path=TrainConfig.MODEL_PATH, rng=None, show=True):
    """
    合成测试：把正样本贴到负例大图的随机位置上，再用训练好的检测器检测。
    :param size: 窗口大小 (w, h)
    :param pos_lst: 正例图片
    :param full_neg_lst: 负例大图
    :param n: 最多测试的张数
    :param model_path: 训练得到的模型文件
    :param rng: numpy随机数生成器
    :param show: 显示每张结果，按ESC结束
    :return: 每张图的DetectionScore列表
    """
    hog = create_hog(size)
    hog.setSVMDetector(get_svm_detector(load_svm(model_path)))
    rng = rng if rng is not None else np.random.default_rng()
    reference = (0, 255, 0)
    w, h = size

    scores = []
    for i in range(min(n, len(pos_lst), len(full_neg_lst))):
        patch = crop_window(pos_lst[i], size)
        img = full_neg_lst[i].copy()
        if patch is None or img.shape[1] <= w or img.shape[0] <= h:
            print("sample %d does not fit the window, skipped" % i)
            continue
        box = (int(rng.integers(img.shape[1] - w)), int(rng.integers(img.shape[0] - h)), w, h)
        img[box[1]:box[1] + h, box[0]:box[0] + w] = patch

        locations, _ = hog.detectMultiScale(img, hitThreshold=TrainConfig.HIT_THRESHOLD)
        draw = img.copy()
        cv2.rectangle(draw, (box[0], box[1]), (box[0] + w, box[1] + h), (0, 0, 200), 3)
        draw_locations(draw, locations, reference)

        score = score_locations(box, locations)
        print("%d true pos of %d %g %g" % (score.hits, score.total, score.min_d, score.max_d))
        scores.append(score)
        if show:
            cv2.imshow("m", draw)
            if cv2.waitKey(TrainConfig.WAIT_MS) & 0xFF == TrainConfig.ESC:
                break
    return scores


def test_live(size, model_path=TrainConfig.MODEL_PATH, camera=TrainConfig.CAMERA):
    print("press 'd' to toggle the default person detector")
    reference = (0, 255, 0)
    trained = (0, 0, 255)

    my_hog = create_hog(size)
    my_hog.setSVMDetector(get_svm_detector(load_svm(model_path)))
    hog = cv2.HOGDescriptor()
    hog.setSVMDetector(cv2.HOGDescriptor.getDefaultPeopleDetector())

    video = cv2.VideoCapture(camera)
    if not video.isOpened():
        raise IOError("Unable to open the device %d" % camera)

    show_default = False
    try:
        while True:
            ok, img = video.read()
            if not ok or img is None:
                break

            draw = img.copy()
            if show_default:
                locations, _ = hog.detectMultiScale(img)
                draw_locations(draw, locations, reference)
            locations, _ = my_hog.detectMultiScale(img)
            draw_locations(draw, locations, trained)

            cv2.imshow("Video", draw)
            key = cv2.waitKey(10) & 0xFF
            if key == TrainConfig.ESC:
                break
            if key == ord('d'):
                show_default = not show_default
    finally:
        video.release()
        cv2.destroyAllWindows()


def build_parser():
    parser = argparse.ArgumentParser(description="Train and test a HOG + linear SVM people detector")
    parser.add_argument("-t", "--test", action="store_true", help="test only")
    parser.add_argument("-p", "--pos", default="", help="folder with pos images like ~/img/*.png")
    parser.add_argument("-n", "--neg", default="", help="folder with neg images")
    parser.add_argument("-s", "--steps", type=int, default=TrainConfig.NEG_STEPS, help="step width for neg patches")
    parser.add_argument("-m", "--mirror", action="store_true", help="mirror pos patches")
    parser.add_argument("-W", "--width", type=int, default=TrainConfig.WIN_WIDTH, help="window width")
    parser.add_argument("-H", "--height", type=int, default=TrainConfig.WIN_HEIGHT, help="window height")
    parser.add_argument("--model", default=TrainConfig.MODEL_PATH, help="trained detector file")
    parser.add_argument("--samples", type=int, default=TrainConfig.TEST_SAMPLES, help="synthetic test images")
    parser.add_argument("--live", action="store_true", help="test against the camera instead")
    parser.add_argument("--camera", type=int, default=TrainConfig.CAMERA, help="camera device index")
    parser.add_argument("--seed", type=int, default=None, help="seed for the synthetic test")
    parser.add_argument("--no-show", action="store_true", help="do not open result windows")
    parser.add_argument("--debug", action="store_true", help="show images and HOG visualisation while loading")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    prog = os.path.basename(sys.argv[0])

    if not window_fits_hog((args.width, args.height)):
        print("window %d x %d does not fit HOG blocks of %d x %d with stride %d x %d"
              % ((args.width, args.height) + HogConfig.BLOCK_SIZE + HogConfig.BLOCK_STRIDE))
        return -1

    if args.test and args.live:
        try:
            test_live((args.width, args.height), args.model, args.camera)
        except (IOError, ValueError) as e:
            print(e)
            return -1
        return 0

    if not args.pos or not args.neg:
        print("Wrong number of parameters.")
        print("Usage: %s --pos=pos_dir --neg=neg_dir" % prog)
        print("example: %s --pos=/INRIA_dataset/*.jpg --neg=/my/bgimages/*.png" % prog)
        return -1

    size = (args.width, args.height)
    pos_lst = load_images(args.pos, show=args.debug)
    if args.mirror:
        pos_lst = mirror_images(pos_lst)
    full_neg_lst = load_images(args.neg, show=args.debug)
    if args.test:
        neg_lst = full_neg_lst
    else:
        neg_lst = sample_neg(full_neg_lst, size, args.steps)
    print("%s with %d positive [%d x %d] and %d negative images"
          % ("testing" if args.test else "training", len(pos_lst), size[0], size[1], len(neg_lst)))

    if not neg_lst:
        print("no negative samples")
        return -1

    if not args.test:
        gradient_lst = compute_hog(pos_lst, size, show=args.debug)
        n_pos = len(gradient_lst)
        gradient_lst += compute_hog(neg_lst, size, show=args.debug)
        if n_pos == 0 or n_pos == len(gradient_lst):
            print("need both positive and negative samples of at least the window size")
            return -1
        labels = [1] * n_pos + [-1] * (len(gradient_lst) - n_pos)
        train_svm(gradient_lst, labels, args.model)

    rng = np.random.default_rng(args.seed)
    try:
        if args.live:
            test_live(size, args.model, args.camera)
        else:
            test_it(size, pos_lst, full_neg_lst, args.samples, args.model, rng, show=not args.no_show)
    except (IOError, ValueError) as e:
        print(e)
        return -1
    return 0


if __name__ == '__main__':
    sys.exit(main())
