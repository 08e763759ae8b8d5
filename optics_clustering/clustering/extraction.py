"""
簇提取模块

该模块从遍历得到的访问顺序和可达距离中提取簇和离群点。

提取过程是对可达性图的单次“谷值提取”：
- 可达距离已定义且不超过阈值的点属于当前打开的（编号最大的）簇；
  如果此前还没有打开任何簇，则视为离群点
- 其他点如果在阈值下仍是核心点，则打开一个新簇，否则视为离群点

提取阈值可以小于构建邻域时的半径，因此可以在不重新计算的情况下
以不同阈值多次提取。
"""

from typing import Dict, List, Sequence, Tuple
import numpy as np

from .neighborhood import Neighborhood
from .traversal import is_defined


class ClusterExtractor:
    """
    簇提取器。

    Attributes:
        neighborhoods (List[Neighborhood]): 每个点的邻域
        min_samples (int): 核心点所需的最小邻居数
    """

    def __init__(self, neighborhoods: List[Neighborhood], min_samples: int) -> None:
        self.neighborhoods = neighborhoods
        self.min_samples = min_samples

    def extract(
        self,
        ordered: Sequence[int],
        reachability: np.ndarray,
        eps: float
    ) -> Tuple[Dict[int, List[int]], List[int]]:
        """
        以给定阈值提取簇和离群点。

        Args:
            ordered: 访问顺序
            reachability: 可达距离数组
            eps: 提取阈值，应不大于构建邻域时的半径

        Returns:
            Tuple[Dict[int, List[int]], List[int]]: (簇编号到成员索引的映射, 离群点索引列表)
        """
        dtype = reachability.dtype
        clusters: Dict[int, List[int]] = {}
        outliers: List[int] = []

        for idx in ordered:
            idx = int(idx)
            reach = reachability[idx]
            if is_defined(reach, dtype) and reach <= eps:
                if not clusters:
                    outliers.append(idx)
                else:
                    clusters[len(clusters) - 1].append(idx)
            elif self._is_core_at(idx, eps):
                clusters[len(clusters)] = [idx]
            else:
                outliers.append(idx)

        return clusters, outliers

    def _is_core_at(self, idx: int, eps: float) -> bool:
        neighborhood = self.neighborhoods[idx]
        return neighborhood.is_core(self.min_samples) and neighborhood.core_distance <= eps


def extract_clusters_and_outliers(
    ordered: Sequence[int],
    reachability: np.ndarray,
    neighborhoods: List[Neighborhood],
    min_samples: int,
    eps: float
) -> Tuple[Dict[int, List[int]], List[int]]:
    """
    提取簇和离群点的便捷函数。

    Args:
        ordered: 访问顺序
        reachability: 可达距离数组
        neighborhoods: 每个点的邻域
        min_samples: 核心点所需的最小邻居数
        eps: 提取阈值

    Returns:
        Tuple[Dict[int, List[int]], List[int]]: (簇映射, 离群点列表)
    """
    return ClusterExtractor(neighborhoods, min_samples).extract(ordered, reachability, eps)
