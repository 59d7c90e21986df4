# -*- encoding: utf-8 -*-
'''
@File    :   main.py
@Time    :   2026/10/14 16:35:26
@Version :   1.0
@Desc    :   演示程序入口：cache 提取缓存图片，train 训练/测试HOG-SVM检测器
'''
import sys

import cache
import train_hog

COMMANDS = {
    'cache': cache.main,
    'train': train_hog.main,
}


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv or argv[0] not in COMMANDS:
        print("Usage: python main.py {%s} [options]" % ",".join(COMMANDS))
        return -1
    return COMMANDS[argv[0]](argv[1:])


if __name__ == '__main__':
    sys.exit(main())
