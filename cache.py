# -*- encoding: utf-8 -*-
'''
@File    :   cache.py
@Time    :   2026/10/12 10:31:57
@Version :   1.0
@Desc    :   从浏览器磁盘缓存中提取足够大的图片
'''
import argparse
import os

import cv2
from tqdm import tqdm

from config import CacheConfig
from utils import glob_files, mkdir


def output_name(entry, cache_dir, out_dir, suffix=CacheConfig.SUFFIX):
    """
    缓存条目对应的输出文件名：相对于缓存目录的路径（分隔符替换为'_'）加后缀。
    """
    rel = os.path.relpath(entry, cache_dir)
    return os.path.join(out_dir, rel.replace(os.sep, '_') + suffix)


def save_if_large(entry, name, min_size=CacheConfig.MIN_SIZE):
    img = cv2.imread(entry)
    if img is None:
        return False
    if img.shape[0] < min_size or img.shape[1] < min_size:
        return False
    return bool(cv2.imwrite(name, img))


def scrape_cache(cache_dir, out_dir, min_size=CacheConfig.MIN_SIZE, suffix=CacheConfig.SUFFIX):
    """
    遍历缓存目录，将能解码且宽高都不小于min_size的图片重新编码保存到out_dir。
    :param cache_dir: 浏览器缓存目录（如 Firefox 的 cache2/entries）
    :param out_dir: 输出目录
    :param min_size: 宽、高的最小像素数
    :param suffix: 输出文件后缀，决定编码格式
    :return: 保存的图片数量
    """
    k = 0
    if not os.path.isdir(cache_dir):
        print("cache folder not found: " + cache_dir)
        return k
    for entry in tqdm(glob_files(cache_dir, recursive=True), leave=False):
        name = output_name(entry, cache_dir, out_dir, suffix)
        if save_if_large(entry, name, min_size):
            tqdm.write("+ " + name)
            k += 1
        else:
            tqdm.write("- " + name)
    print("saved %d images." % k)
    return k


def main(argv=None):
    parser = argparse.ArgumentParser(description="Copy large images out of a browser disk cache")
    parser.add_argument("subfolder", nargs="?", help="sub folder of the output folder to save into")
    parser.add_argument("--cache-dir", default=CacheConfig.CACHE_DIR, help="browser cache entries folder")
    parser.add_argument("--out-dir", default=CacheConfig.OUTPUT_DIR, help="output folder")
    parser.add_argument("--min-size", type=int, default=CacheConfig.MIN_SIZE,
                        help="minimum width and height of a saved image")
    args = parser.parse_args(argv)

    out_dir = args.out_dir
    if args.subfolder:
        out_dir = os.path.join(out_dir, args.subfolder)
    mkdir(out_dir)
    scrape_cache(args.cache_dir, out_dir, args.min_size)
    return 0


if __name__ == '__main__':
    main()
