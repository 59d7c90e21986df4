# -*- encoding: utf-8 -*-
'''
@File    :   utils.py
@Time    :   2026/10/12 10:15:03
@Version :   1.0
@Desc    :   文件通配与目录工具函数
'''
import os
from fnmatch import fnmatch


def glob_files(pattern, recursive=True):
    """
    展开形如 ~/img/*.png 的通配路径。
    :param pattern: 目录名，或“目录/通配符”
    :param recursive: 是否同时搜索子目录
    :return: 排序后的文件路径列表
    """
    if os.path.isdir(pattern):
        folder, wildcard = pattern, '*'
    else:
        folder, wildcard = os.path.split(pattern)
        folder = folder or '.'
    if not os.path.isdir(folder):
        return []

    result = []
    for root, dirs, files in os.walk(folder):
        dirs.sort()
        for name in files:
            if fnmatch(name, wildcard):
                result.append(os.path.join(root, name))
        if not recursive:
            break
    return sorted(result)


def mkdir(path):
    if not os.path.exists(path):
        os.makedirs(path)
        return True
    return False
