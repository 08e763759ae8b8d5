"""
OPTICS 聚类模块

该模块提供 OPTICS（Ordering Points To Identify the Clustering Structure）
聚类算法的统一入口，负责串联以下三个阶段：
1. 邻域构建（并行）
2. 可达性遍历（顺序）
3. 簇提取（可在不同阈值下重复执行）

Example:
    >>> points = np.array([[1., 2.], [2., 5.], [3., 6.], [8., 7.], [8., 8.], [7., 3.]])
    >>> clusters, outliers = Optics(eps=4.5, min_samples=2).fit(points)
    >>> len(clusters)
    2
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import time
import numpy as np

from .distance import DistanceMetric, get_metric
from .extraction import ClusterExtractor
from .neighborhood import Neighborhood, NeighborhoodBuilder
from .traversal import ReachabilityTraversal


@dataclass
class OpticsConfig:
    """
    OPTICS 聚类配置类。

    以下前置条件仅作说明、不做检查，违反时结果未定义：
    eps >= 0，min_samples >= 1，度量满足对称性和非负性。

    Attributes:
        eps (float): 邻域半径
        min_samples (int): 核心点所需的最小邻居数（包含自身）
        metric (Union[str, DistanceMetric, Callable]): 距离度量
        n_jobs (Optional[int]): 邻域构建的并行工作数
        chunk_size (int): 每个并行任务处理的点数
        verbose (bool): 是否打印详细信息
    """
    eps: float = 0.5
    min_samples: int = 5
    metric: Union[str, DistanceMetric, Callable] = "euclidean"
    n_jobs: Optional[int] = None
    chunk_size: int = 256
    verbose: bool = False


class Optics:
    """
    OPTICS 聚类器。

    配置在构造时确定，之后不可修改。fit 之后保存访问顺序和可达距离，
    可以通过 extract 以不超过 eps 的任意阈值重新提取簇，无需重新计算。

    Attributes:
        config (OpticsConfig): 配置副本
        neighborhoods_ (List[Neighborhood]): 最近一次 fit 的邻域
        ordered_ (np.ndarray): 最近一次 fit 的访问顺序
        reachability_ (np.ndarray): 最近一次 fit 的可达距离
    """

    def __init__(self, config: Optional[OpticsConfig] = None, **kwargs) -> None:
        """
        初始化 OPTICS 聚类器。

        Args:
            config: 聚类配置对象，默认为默认配置
            **kwargs: 覆盖配置中的字段，例如 eps=0.3, min_samples=2
        """
        config = config if config is not None else OpticsConfig()
        self._config = replace(config, **kwargs)
        self._metric = get_metric(self._config.metric)

        self.neighborhoods_: List[Neighborhood] = []
        self.ordered_ = np.empty(0, dtype=np.intp)
        self.reachability_ = np.empty(0, dtype=np.float64)
        self.n_points_ = 0
        self.fit_time_ = 0.0

    @property
    def config(self) -> OpticsConfig:
        return replace(self._config)

    @property
    def eps(self) -> float:
        return self._config.eps

    @property
    def min_samples(self) -> int:
        return self._config.min_samples

    @property
    def metric(self) -> DistanceMetric:
        return self._metric

    @property
    def core_distances_(self) -> np.ndarray:
        return np.array([n.core_distance for n in self.neighborhoods_], dtype=self.reachability_.dtype)

    def fit(self, points: np.ndarray) -> Tuple[Dict[int, List[int]], List[int]]:
        """
        对点集执行 OPTICS 聚类，并以 eps 作为阈值提取簇。

        Args:
            points: 数据点数组，形状为 [n_points, n_features]；
                一维数组视为 n_points 个一维点

        Returns:
            Tuple[Dict[int, List[int]], List[int]]: (簇编号到成员索引的映射, 离群点索引列表)

        Raises:
            ValueError: 如果输入维度超过2
        """
        points = self._prepare_points(points)
        start_time = time.time()

        self.n_points_ = len(points)
        if points.size == 0:
            self.neighborhoods_ = []
            self.ordered_ = np.empty(0, dtype=np.intp)
            self.reachability_ = np.empty(0, dtype=points.dtype)
            self.fit_time_ = 0.0
            return {}, []

        builder = NeighborhoodBuilder(
            self.eps,
            metric=self._metric,
            n_jobs=self._config.n_jobs,
            chunk_size=self._config.chunk_size,
            verbose=self._config.verbose
        )
        self.neighborhoods_ = builder.build(points)

        traversal = ReachabilityTraversal(points, self.neighborhoods_, self.min_samples, self._metric)
        self.ordered_, self.reachability_ = traversal.run()

        self.fit_time_ = time.time() - start_time

        clusters, outliers = self.extract(self.eps)

        if self._config.verbose:
            print(f"OPTICS 完成，用时: {self.fit_time_:.2f}秒")
            print(f"  - 点数: {self.n_points_}，已访问: {len(self.ordered_)}")
            print(f"  - 簇数: {len(clusters)}，离群点数: {len(outliers)}")

        return clusters, outliers

    def extract(self, eps: float) -> Tuple[Dict[int, List[int]], List[int]]:
        """
        基于最近一次 fit 的结果，以新的阈值重新提取簇和离群点。

        阈值应不大于构建半径 eps，否则邻域和核心距离不再有效。

        Args:
            eps: 提取阈值

        Returns:
            Tuple[Dict[int, List[int]], List[int]]: (簇映射, 离群点列表)
        """
        extractor = ClusterExtractor(self.neighborhoods_, self.min_samples)
        return extractor.extract(self.ordered_, self.reachability_, eps)

    def labels(self, eps: Optional[float] = None) -> np.ndarray:
        """
        以标签数组的形式返回提取结果。

        Args:
            eps: 提取阈值，默认为构建半径

        Returns:
            np.ndarray: 每个点的簇编号，离群点为 -1，未被访问的点为 -2
        """
        from ..utils.metrics import clusters_to_labels

        clusters, outliers = self.extract(self.eps if eps is None else eps)
        return clusters_to_labels(clusters, outliers, self.n_points_)

    def fit_predict(self, points: np.ndarray) -> np.ndarray:
        """
        执行聚类并返回标签数组。

        Args:
            points: 数据点数组

        Returns:
            np.ndarray: 标签数组
        """
        self.fit(points)
        return self.labels()

    def get_result(self) -> Dict[str, Any]:
        """
        获取聚类结果字典。

        Returns:
            Dict[str, Any]: 包含聚类结果的字典
        """
        clusters, outliers = self.extract(self.eps)
        return {
            "clusters": clusters,
            "outliers": outliers,
            "ordered": self.ordered_,
            "reachability": self.reachability_,
            "core_distances": self.core_distances_,
            "n_points": self.n_points_,
            "n_visited": len(self.ordered_),
            "fit_time": self.fit_time_,
        }

    @staticmethod
    def _prepare_points(points: np.ndarray) -> np.ndarray:
        """
        将输入整理为C连续的二维浮点数组。

        Args:
            points: 原始输入

        Returns:
            np.ndarray: 形状为 [n_points, n_features] 的数组
        """
        points = np.asarray(points)
        if not np.issubdtype(points.dtype, np.floating):
            points = points.astype(np.float64)
        if points.ndim == 1:
            points = points.reshape(-1, 1)
        elif points.ndim != 2:
            raise ValueError(f"输入必须是一维或二维数组，当前维度: {points.ndim}")
        return np.ascontiguousarray(points)

    def __repr__(self) -> str:
        return f"Optics(eps={self.eps}, min_samples={self.min_samples}, metric={self._metric!r})"
