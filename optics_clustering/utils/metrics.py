"""
评估指标模块

该模块提供了聚类结果的整理和评估函数。

主要内容：
- 簇映射与标签数组之间的转换
- 聚类评估指标：ARI, NMI
- 聚类结果统计
"""

from typing import Dict, List, Optional
import numpy as np

NOISE_LABEL = -1
UNVISITED_LABEL = -2


def clusters_to_labels(
    clusters: Dict[int, List[int]],
    outliers: List[int],
    n_points: int
) -> np.ndarray:
    """
    将簇映射和离群点列表转换为标签数组。

    Args:
        clusters: 簇编号到成员索引的映射
        outliers: 离群点索引列表
        n_points: 点的总数

    Returns:
        np.ndarray: 标签数组，离群点为 -1，未被访问的点为 -2

    Example:
        >>> clusters_to_labels({0: [0, 1], 1: [3]}, [2], 5)
        array([ 0,  0, -1,  1, -2])
    """
    labels = np.full(n_points, UNVISITED_LABEL, dtype=int)
    for cluster_id, members in clusters.items():
        labels[list(members)] = cluster_id
    labels[list(outliers)] = NOISE_LABEL
    return labels


def labels_to_clusters(labels: np.ndarray) -> Dict[int, List[int]]:
    """
    将标签数组转换为簇映射（忽略离群点和未访问点）。

    Args:
        labels: 标签数组

    Returns:
        Dict[int, List[int]]: 簇编号到成员索引（升序）的映射
    """
    clusters: Dict[int, List[int]] = {}
    for idx, label in enumerate(np.asarray(labels)):
        if label >= 0:
            clusters.setdefault(int(label), []).append(idx)
    return clusters


def calculate_ari(
    predictions: np.ndarray,
    actuals: np.ndarray
) -> float:
    """
    计算调整兰德指数（ARI）。

    ARI是兰德指数的调整版本，校正了随机聚类的期望，
    取值范围为[-1, 1]，越接近1表示聚类效果越好。
    预测或真实标签为负（离群点、未访问点）的样本不参与计算。

    Args:
        predictions: 预测聚类标签
        actuals: 真实聚类标签

    Returns:
        float: ARI值
    """
    from sklearn import metrics

    predictions = np.asarray(predictions)
    actuals = np.asarray(actuals)
    valid_mask = (predictions >= 0) & (actuals >= 0)

    if np.sum(valid_mask) < 2:
        return 0.0

    return float(metrics.adjusted_rand_score(actuals[valid_mask], predictions[valid_mask]))


def calculate_nmi(
    predictions: np.ndarray,
    actuals: np.ndarray
) -> float:
    """
    计算归一化互信息（NMI）。

    NMI衡量两个聚类之间的互信息，
    取值范围为[0, 1]，越接近1表示聚类效果越好。

    Args:
        predictions: 预测聚类标签
        actuals: 真实聚类标签

    Returns:
        float: NMI值
    """
    from sklearn import metrics

    predictions = np.asarray(predictions)
    actuals = np.asarray(actuals)
    valid_mask = (predictions >= 0) & (actuals >= 0)

    if np.sum(valid_mask) < 2:
        return 0.0

    return float(metrics.normalized_mutual_info_score(
        actuals[valid_mask],
        predictions[valid_mask],
        average_method='arithmetic'
    ))


def summarize_clustering(
    clusters: Dict[int, List[int]],
    outliers: List[int],
    n_points: int
) -> dict:
    """
    统计聚类结果。

    Args:
        clusters: 簇映射
        outliers: 离群点列表
        n_points: 点的总数

    Returns:
        dict: 包含簇数、各簇大小、离群点数、未访问点数等信息的字典
    """
    sizes = [len(members) for _, members in sorted(clusters.items())]
    n_clustered = sum(sizes)
    return {
        'n_clusters': len(clusters),
        'cluster_sizes': sizes,
        'n_clustered': n_clustered,
        'n_outliers': len(outliers),
        'n_unvisited': n_points - n_clustered - len(outliers),
        'outlier_ratio': len(outliers) / n_points if n_points > 0 else 0.0,
        'largest_cluster': max(sizes) if sizes else 0,
    }


class EvaluationMetrics:
    """
    聚类评估指标综合计算类。

    Attributes:
        clustering_metrics (List[str]): 要计算的聚类指标列表
    """

    def __init__(self, clustering_metrics: Optional[list] = None) -> None:
        if clustering_metrics is None:
            clustering_metrics = ['ari', 'nmi']
        self.clustering_metrics = clustering_metrics

    def evaluate(
        self,
        clusters: Dict[int, List[int]],
        outliers: List[int],
        n_points: int,
        ground_truth: Optional[np.ndarray] = None
    ) -> dict:
        """
        计算聚类统计和（可选的）外部评估指标。

        Args:
            clusters: 簇映射
            outliers: 离群点列表
            n_points: 点的总数
            ground_truth: 真实标签（可选）

        Returns:
            dict: 包含各指标的字典
        """
        results = summarize_clustering(clusters, outliers, n_points)

        if ground_truth is not None:
            predictions = clusters_to_labels(clusters, outliers, n_points)
            if 'ari' in self.clustering_metrics:
                results['ari'] = calculate_ari(predictions, ground_truth)
            if 'nmi' in self.clustering_metrics:
                results['nmi'] = calculate_nmi(predictions, ground_truth)

        return results

    def print_results(self, results: dict, title: str = 'OPTICS') -> None:
        """
        打印评估结果。

        Args:
            results: 评估结果字典
            title: 标题
        """
        print(f"\n{'='*50}")
        print(f"{title} 聚类结果")
        print(f"{'='*50}")

        for metric, value in results.items():
            if value is None:
                continue
            if isinstance(value, float):
                print(f"{metric}: {value:.4f}")
            else:
                print(f"{metric}: {value}")

        print(f"{'='*50}\n")
