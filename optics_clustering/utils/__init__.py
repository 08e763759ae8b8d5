"""
工具函数模块

该模块提供了项目常用的工具函数，包括：
- 聚类评估指标计算
- 可视化工具
- 结果保存
"""

from .metrics import (
    clusters_to_labels,
    labels_to_clusters,
    calculate_ari,
    calculate_nmi,
    summarize_clustering,
    EvaluationMetrics,
    NOISE_LABEL,
    UNVISITED_LABEL,
)

from .visualization import (
    VisualizationConfig,
    plot_reachability,
    plot_clustering_results,
    save_evaluation_results,
    save_labels,
    create_results_directory,
)

__all__ = [
    "clusters_to_labels",
    "labels_to_clusters",
    "calculate_ari",
    "calculate_nmi",
    "summarize_clustering",
    "EvaluationMetrics",
    "NOISE_LABEL",
    "UNVISITED_LABEL",
    "VisualizationConfig",
    "plot_reachability",
    "plot_clustering_results",
    "save_evaluation_results",
    "save_labels",
    "create_results_directory",
]
