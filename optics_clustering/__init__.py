"""
optics_clustering 项目源代码包

该项目包含以下主要模块：
- clustering: OPTICS 密度聚类算法模块
- data: 点集加载模块
- utils: 评估与可视化工具模块
"""

from .clustering import Optics, OpticsConfig

__version__ = "1.0.0"
__author__ = "optics_clustering Team"

__all__ = ["Optics", "OpticsConfig"]
