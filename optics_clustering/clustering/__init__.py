"""
聚类模块

该模块提供了 OPTICS 密度聚类算法的实现，包括：
- 距离度量接口
- 邻域构建（并行）
- 可达性遍历
- 簇提取
- 统一的 Optics 聚类器
"""

from .distance import (
    DistanceMetric,
    Euclidean,
    Manhattan,
    Chebyshev,
    Minkowski,
    CallableMetric,
    get_metric,
    available_metrics,
)
from .neighborhood import Neighborhood, NeighborhoodBuilder, build_neighborhoods
from .traversal import ReachabilityTraversal, compute_ordering, is_defined
from .extraction import ClusterExtractor, extract_clusters_and_outliers
from .optics import Optics, OpticsConfig

__all__ = [
    "DistanceMetric",
    "Euclidean",
    "Manhattan",
    "Chebyshev",
    "Minkowski",
    "CallableMetric",
    "get_metric",
    "available_metrics",
    "Neighborhood",
    "NeighborhoodBuilder",
    "build_neighborhoods",
    "ReachabilityTraversal",
    "compute_ordering",
    "is_defined",
    "ClusterExtractor",
    "extract_clusters_and_outliers",
    "Optics",
    "OpticsConfig",
]
