"""
邻域构建模块

该模块为点集中的每个点计算：
- neighbors: 半径 eps 内的所有点索引（包含点自身）
- core_distance: 到第二近点的距离（第一近点是自身），
  邻居数不超过1时为0

每个点的计算互不依赖，没有共享的可变状态，
因此以分块的方式在 joblib 工作池中并行执行，
所有工作线程共享同一个只读的 BallTree 空间索引。
"""

from dataclasses import dataclass
from typing import List, Optional
import numpy as np
from joblib import Parallel, delayed
from sklearn.neighbors import BallTree
from tqdm import tqdm

from .distance import DistanceMetric, get_metric


@dataclass(frozen=True, eq=False)
class Neighborhood:
    """
    单个点的邻域信息，构建后不可修改。

    Attributes:
        neighbors (np.ndarray): 半径内的点索引（升序，包含自身）
        core_distance (float): 核心距离（到第二近点的距离）
    """
    neighbors: np.ndarray
    core_distance: float

    def __len__(self) -> int:
        return len(self.neighbors)

    def is_core(self, min_samples: int) -> bool:
        """
        判断该点是否为核心点。

        Args:
            min_samples: 核心点所需的最小邻居数

        Returns:
            bool: 是否为核心点
        """
        return len(self.neighbors) >= min_samples


class NeighborhoodBuilder:
    """
    邻域构建器。

    在完整点集上构建一次 BallTree，然后对每个点执行半径查询
    和 k=2 近邻查询。

    Attributes:
        eps (float): 邻域半径
        metric (DistanceMetric): 距离度量
        n_jobs (Optional[int]): 并行工作数，None 表示单个工作，-1 表示全部CPU
        chunk_size (int): 每个并行任务处理的点数
        verbose (bool): 是否显示进度条
    """

    def __init__(
        self,
        eps: float,
        metric: Optional[DistanceMetric] = None,
        n_jobs: Optional[int] = None,
        chunk_size: int = 256,
        verbose: bool = False
    ) -> None:
        self.eps = eps
        self.metric = get_metric(metric)
        self.n_jobs = n_jobs
        self.chunk_size = max(1, int(chunk_size))
        self.verbose = verbose

    def build(self, points: np.ndarray) -> List[Neighborhood]:
        """
        为所有点构建邻域。

        Args:
            points: 数据点数组，形状为 [n_points, n_features]，需为C连续布局

        Returns:
            List[Neighborhood]: 与点集索引一一对应的邻域列表
        """
        if len(points) == 0:
            return []

        tree = BallTree(points, **self.metric.ball_tree_params())
        dtype = points.dtype if np.issubdtype(points.dtype, np.floating) else np.dtype(np.float64)

        chunks = [
            np.arange(start, min(start + self.chunk_size, len(points)))
            for start in range(0, len(points), self.chunk_size)
        ]
        if self.verbose:
            chunks = tqdm(chunks, desc="构建邻域", ncols=80, unit="块")

        results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
            delayed(self._build_chunk)(tree, points, indices, dtype) for indices in chunks
        )
        return [neighborhood for chunk in results for neighborhood in chunk]

    def _build_chunk(
        self,
        tree: BallTree,
        points: np.ndarray,
        indices: np.ndarray,
        dtype: np.dtype
    ) -> List[Neighborhood]:
        """
        计算一个分块内各点的邻域。

        Args:
            tree: 只读空间索引
            points: 完整点集
            indices: 分块中的点索引
            dtype: 核心距离的浮点类型

        Returns:
            List[Neighborhood]: 分块内各点的邻域
        """
        queries = points[indices]
        radius_hits = tree.query_radius(queries, r=self.eps)

        neighborhoods: List[Neighborhood] = []
        for query, hits in zip(queries, radius_hits):
            neighbors = np.sort(hits.astype(np.intp))
            if len(neighbors) > 1:
                distances, _ = tree.query(query.reshape(1, -1), k=2)
                core_distance = dtype.type(distances[0, 1])
            else:
                core_distance = dtype.type(0)
            neighborhoods.append(Neighborhood(neighbors=neighbors, core_distance=core_distance))
        return neighborhoods


def build_neighborhoods(
    points: np.ndarray,
    eps: float,
    metric: Optional[DistanceMetric] = None,
    n_jobs: Optional[int] = None
) -> List[Neighborhood]:
    """
    构建邻域的便捷函数。

    Args:
        points: 数据点数组，形状为 [n_points, n_features]
        eps: 邻域半径
        metric: 距离度量，默认为欧氏距离
        n_jobs: 并行工作数

    Returns:
        List[Neighborhood]: 邻域列表

    Example:
        >>> points = np.array([[0.0], [0.3], [5.0]])
        >>> [len(n) for n in build_neighborhoods(points, 0.5)]
        [2, 2, 1]
    """
    points = np.ascontiguousarray(points)
    return NeighborhoodBuilder(eps, metric=metric, n_jobs=n_jobs).build(points)
