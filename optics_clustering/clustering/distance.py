"""
距离度量模块

该模块定义了聚类算法使用的距离度量接口。
度量需要满足对称性和非负性（并假定满足三角不等式），
同一个度量既用于空间索引（BallTree）的半径查询和近邻查询，
也用于遍历阶段计算可达距离。

内置度量：
- Euclidean: 欧氏距离（默认）
- Manhattan: 曼哈顿距离
- Chebyshev: 切比雪夫距离
- Minkowski: 闵可夫斯基距离
- CallableMetric: 任意Python函数包装的自定义度量
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Union
import numpy as np
import numpy.linalg as la


class DistanceMetric(ABC):
    """
    距离度量抽象基类。

    子类需要实现 distance 方法；如果度量可以向量化，
    应当重写 distances 方法以提高效率。

    Attributes:
        name (str): 度量名称
    """

    name: str = "custom"

    @abstractmethod
    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        """
        计算两个向量之间的距离（由子类实现）。

        Args:
            a: 第一个向量，形状为 [n_features]
            b: 第二个向量，形状为 [n_features]

        Returns:
            float: 距离值
        """
        pass

    def distances(self, a: np.ndarray, points: np.ndarray) -> np.ndarray:
        """
        计算一个向量到一组向量的距离。

        Args:
            a: 参考向量，形状为 [n_features]
            points: 数据点数组，形状为 [n_points, n_features]

        Returns:
            np.ndarray: 距离数组，形状为 [n_points]
        """
        return np.array([self.distance(a, p) for p in points], dtype=float)

    def ball_tree_params(self) -> Dict[str, Any]:
        """
        返回构建 sklearn BallTree 时使用的度量参数。

        默认将 distance 方法作为Python函数度量传给 BallTree。

        Returns:
            Dict[str, Any]: BallTree 关键字参数
        """
        return {"metric": self.distance}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Euclidean(DistanceMetric):
    """
    欧氏距离。

    公式：d(a, b) = sqrt(Σ(a_i - b_i)²)
    """

    name = "euclidean"

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(la.norm(np.asarray(a) - np.asarray(b)))

    def distances(self, a: np.ndarray, points: np.ndarray) -> np.ndarray:
        return la.norm(np.asarray(points) - np.asarray(a), axis=1)

    def ball_tree_params(self) -> Dict[str, Any]:
        return {"metric": "euclidean"}


class Manhattan(DistanceMetric):
    """
    曼哈顿距离。

    公式：d(a, b) = Σ|a_i - b_i|
    """

    name = "manhattan"

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(np.sum(np.abs(np.asarray(a) - np.asarray(b))))

    def distances(self, a: np.ndarray, points: np.ndarray) -> np.ndarray:
        return np.sum(np.abs(np.asarray(points) - np.asarray(a)), axis=1)

    def ball_tree_params(self) -> Dict[str, Any]:
        return {"metric": "manhattan"}


class Chebyshev(DistanceMetric):
    """
    切比雪夫距离。

    公式：d(a, b) = max|a_i - b_i|
    """

    name = "chebyshev"

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(np.max(np.abs(np.asarray(a) - np.asarray(b))))

    def distances(self, a: np.ndarray, points: np.ndarray) -> np.ndarray:
        return np.max(np.abs(np.asarray(points) - np.asarray(a)), axis=1)

    def ball_tree_params(self) -> Dict[str, Any]:
        return {"metric": "chebyshev"}


class Minkowski(DistanceMetric):
    """
    闵可夫斯基距离。

    公式：d(a, b) = (Σ|a_i - b_i|^p)^(1/p)

    Attributes:
        p (float): 阶数，p=1 为曼哈顿距离，p=2 为欧氏距离
    """

    name = "minkowski"

    def __init__(self, p: float = 2.0) -> None:
        if p < 1:
            raise ValueError(f"p 必须大于等于1，当前值: {p}")
        self.p = p

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(la.norm(np.asarray(a) - np.asarray(b), ord=self.p))

    def distances(self, a: np.ndarray, points: np.ndarray) -> np.ndarray:
        diff = np.abs(np.asarray(points) - np.asarray(a))
        return np.sum(diff ** self.p, axis=1) ** (1.0 / self.p)

    def ball_tree_params(self) -> Dict[str, Any]:
        return {"metric": "minkowski", "p": self.p}

    def __repr__(self) -> str:
        return f"Minkowski(p={self.p})"


class CallableMetric(DistanceMetric):
    """
    自定义函数度量。

    将任意接受两个向量、返回标量距离的函数包装为度量。
    BallTree 会以Python函数方式调用它，速度明显慢于内置度量。

    Attributes:
        func (Callable): 距离函数
    """

    def __init__(self, func: Callable[[np.ndarray, np.ndarray], float], name: str = "custom") -> None:
        self.func = func
        self.name = name

    def distance(self, a: np.ndarray, b: np.ndarray) -> float:
        return float(self.func(a, b))

    def __repr__(self) -> str:
        return f"CallableMetric(name={self.name!r})"


_BUILTIN_METRICS = {
    "euclidean": Euclidean,
    "l2": Euclidean,
    "manhattan": Manhattan,
    "cityblock": Manhattan,
    "l1": Manhattan,
    "chebyshev": Chebyshev,
    "minkowski": Minkowski,
}


def get_metric(metric: Union[str, DistanceMetric, Callable, None] = None) -> DistanceMetric:
    """
    根据名称、函数或实例获取距离度量对象。

    Args:
        metric: 度量名称（如 'euclidean'）、DistanceMetric 实例、
            距离函数，或 None（默认欧氏距离）

    Returns:
        DistanceMetric: 距离度量对象

    Raises:
        ValueError: 如果度量名称不受支持

    Example:
        >>> get_metric('manhattan').distance(np.array([0, 0]), np.array([1, 1]))
        2.0
    """
    if metric is None:
        return Euclidean()
    if isinstance(metric, DistanceMetric):
        return metric
    if isinstance(metric, str):
        key = metric.lower()
        if key not in _BUILTIN_METRICS:
            raise ValueError(f"不支持的距离度量: {metric}，可选: {sorted(_BUILTIN_METRICS)}")
        return _BUILTIN_METRICS[key]()
    if callable(metric):
        return CallableMetric(metric, name=getattr(metric, "__name__", "custom"))
    raise ValueError(f"无法识别的距离度量: {metric!r}")


def available_metrics() -> list:
    """
    返回所有内置度量名称。

    Returns:
        list: 度量名称列表
    """
    return sorted(_BUILTIN_METRICS)
