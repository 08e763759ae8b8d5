"""
数据处理模块

该模块提供了待聚类点集的加载和预处理功能。
主要包含以下组件：
- PointSetConfig: 点集加载配置
- PointSetLoader: 点集加载器（CSV、MAT、NPY）
- load_points: 加载点集的便捷函数
"""

from .loader import PointSetConfig, PointSetLoader, load_points, SUPPORTED_FORMATS

__all__ = [
    'PointSetConfig',
    'PointSetLoader',
    'load_points',
    'SUPPORTED_FORMATS',
]
