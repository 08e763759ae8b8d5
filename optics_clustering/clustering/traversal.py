"""
可达性遍历模块

该模块实现了 OPTICS 算法的核心：按点的自然顺序依次选择未访问的核心点
作为起点，沿着密度相连的关系扩展，得到全局访问顺序和每个点的可达距离。

遍历过程：
1. 外层循环按索引升序选取未访问的核心点
2. 以显式栈代替递归进行扩展
3. 每访问一个核心点，更新其未访问邻居的可达距离并放入种子缓冲区
4. 种子缓冲区按可达距离降序排序，从尾部弹出最小值（模拟最小优先队列）
5. 种子缓冲区完全清空后才返回外层栈

可达距离数组以 NaN 表示“未定义”。只有有限、非零、非次正规的值才被视为
“已定义”，因此完全重合的点之间为0的可达距离仍按未定义处理。
"""

from typing import List, Optional, Tuple
import numpy as np

from .distance import DistanceMetric, get_metric
from .neighborhood import Neighborhood


def is_defined(value: float, dtype: np.dtype = np.dtype(np.float64)) -> bool:
    """
    判断可达距离是否已定义。

    已定义的值必须是有限的、非零的、非次正规的数值（NaN 视为未定义）。

    Args:
        value: 可达距离值
        dtype: 可达距离数组的浮点类型

    Returns:
        bool: 是否已定义

    Example:
        >>> is_defined(0.5), is_defined(0.0), is_defined(float('nan'))
        (True, False, False)
    """
    return bool(np.isfinite(value) and abs(value) >= np.finfo(dtype).tiny)


class ReachabilityTraversal:
    """
    可达性遍历器。

    遍历器独占 visited、reachability、ordered 三个缓冲区，
    每个点最多被访问一次。

    Attributes:
        points (np.ndarray): 数据点数组
        neighborhoods (List[Neighborhood]): 每个点的邻域
        min_samples (int): 核心点所需的最小邻居数
        metric (DistanceMetric): 距离度量
        visited (np.ndarray): 访问标记
        reachability (np.ndarray): 可达距离，初始为 NaN
        ordered (List[int]): 访问顺序
    """

    def __init__(
        self,
        points: np.ndarray,
        neighborhoods: List[Neighborhood],
        min_samples: int,
        metric: Optional[DistanceMetric] = None,
        dtype: Optional[np.dtype] = None
    ) -> None:
        self.points = points
        self.neighborhoods = neighborhoods
        self.min_samples = min_samples
        self.metric = get_metric(metric)

        if dtype is None:
            dtype = points.dtype if np.issubdtype(points.dtype, np.floating) else np.float64
        self.dtype = np.dtype(dtype)

        n_points = len(neighborhoods)
        self.visited = np.zeros(n_points, dtype=bool)
        self.reachability = np.full(n_points, np.nan, dtype=self.dtype)
        self.ordered: List[int] = []

    def run(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        执行完整遍历。

        Returns:
            Tuple[np.ndarray, np.ndarray]: (访问顺序, 可达距离数组)
        """
        for idx, neighborhood in enumerate(self.neighborhoods):
            if self.visited[idx] or not neighborhood.is_core(self.min_samples):
                continue
            self._process(idx)

        return np.asarray(self.ordered, dtype=np.intp), self.reachability

    def _process(self, idx: int) -> None:
        """
        从一个核心点出发进行扩展。

        Args:
            idx: 起始核心点索引
        """
        to_visit = [idx]
        while to_visit:
            cur = to_visit.pop()
            if not self._visit(cur):
                continue

            seeds: List[int] = []
            self._update(cur, seeds)
            while seeds:
                self._visit_and_update(seeds.pop(), seeds)

    def _visit(self, idx: int) -> bool:
        """
        访问一个点并返回它是否需要继续扩展。

        Args:
            idx: 点索引

        Returns:
            bool: 该点是首次访问且为核心点时返回 True
        """
        if self.visited[idx]:
            return False
        self.visited[idx] = True
        self.ordered.append(idx)
        return self.neighborhoods[idx].is_core(self.min_samples)

    def _visit_and_update(self, idx: int, seeds: List[int]) -> None:
        if self._visit(idx):
            self._update(idx, seeds)

    def _update(self, idx: int, seeds: List[int]) -> None:
        """
        用核心点更新其未访问邻居的可达距离。

        可达距离候选值 = max(邻居到核心点的距离, 核心点的核心距离)。
        未定义的邻居直接赋值并加入种子缓冲区，已定义的邻居仅在候选值
        严格更小时覆盖（不重复加入）。

        Args:
            idx: 当前核心点索引
            seeds: 种子缓冲区（原地修改并重新排序）
        """
        neighborhood = self.neighborhoods[idx]
        candidates = neighborhood.neighbors[~self.visited[neighborhood.neighbors]]

        if len(candidates) > 0:
            distances = self.metric.distances(self.points[idx], self.points[candidates])
            reach_distances = np.maximum(distances, neighborhood.core_distance).astype(self.dtype)

            for o, reach_distance in zip(candidates, reach_distances):
                if not is_defined(self.reachability[o], self.dtype):
                    self.reachability[o] = reach_distance
                    seeds.append(int(o))
                elif reach_distance < self.reachability[o]:
                    self.reachability[o] = reach_distance

        seeds.sort(key=lambda s: self.reachability[s], reverse=True)


def compute_ordering(
    points: np.ndarray,
    neighborhoods: List[Neighborhood],
    min_samples: int,
    metric: Optional[DistanceMetric] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    计算访问顺序和可达距离的便捷函数。

    Args:
        points: 数据点数组
        neighborhoods: 每个点的邻域
        min_samples: 核心点所需的最小邻居数
        metric: 距离度量

    Returns:
        Tuple[np.ndarray, np.ndarray]: (访问顺序, 可达距离数组)
    """
    return ReachabilityTraversal(points, neighborhoods, min_samples, metric).run()
