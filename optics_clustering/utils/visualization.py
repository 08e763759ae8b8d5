"""
可视化工具模块

该模块提供了 OPTICS 聚类结果的可视化和保存功能。

主要功能：
- 绘制可达性图
- 绘制聚类结果散点图
- 保存评估结果和标签
"""

from typing import Dict, List, Optional, Tuple
import os
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure


class VisualizationConfig:
    """
    可视化配置类。

    Attributes:
        figure_size (Tuple[int, int]): 图形尺寸
        dpi (int): 图形分辨率
        save_format (str): 保存格式 ('png', 'pdf', 'svg')
        style (str): 绘图风格
        color_map (str): 颜色映射
    """

    def __init__(
        self,
        figure_size: Tuple[int, int] = (12, 6),
        dpi: int = 100,
        save_format: str = 'png',
        style: str = 'default',
        color_map: str = 'viridis'
    ) -> None:
        self.figure_size = figure_size
        self.dpi = dpi
        self.save_format = save_format
        self.style = style
        self.color_map = color_map


def _save_figure(fig: Figure, save_path: Optional[str], config: VisualizationConfig) -> None:
    if save_path:
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(save_path, format=config.save_format, dpi=config.dpi)
        print(f"图形已保存到: {save_path}")


def plot_reachability(
    ordered: np.ndarray,
    reachability: np.ndarray,
    eps: Optional[float] = None,
    clusters: Optional[Dict[int, List[int]]] = None,
    save_path: Optional[str] = None,
    config: Optional[VisualizationConfig] = None,
    title: str = '可达性图'
) -> Figure:
    """
    绘制可达性图。

    横轴为访问顺序，纵轴为可达距离。簇对应图中的“谷”，
    簇之间由核心点处的“峰”分隔。未定义的可达距离绘制在图的顶部。

    Args:
        ordered: 访问顺序
        reachability: 可达距离数组（按点索引）
        eps: 提取阈值（可选，绘制为水平线）
        clusters: 簇映射（可选，用于着色）
        save_path: 保存路径（可选）
        config: 可视化配置
        title: 图形标题

    Returns:
        Figure: matplotlib图形对象

    Example:
        >>> fig = plot_reachability(model.ordered_, model.reachability_, eps=0.5)
    """
    from ..clustering.traversal import is_defined

    if config is None:
        config = VisualizationConfig()

    plt.style.use(config.style)

    fig, ax = plt.subplots(figsize=config.figure_size, dpi=config.dpi)

    ordered = np.asarray(ordered, dtype=int)
    values = np.asarray(reachability)[ordered] if len(ordered) > 0 else np.empty(0)
    defined = np.array([is_defined(v, values.dtype) for v in values], dtype=bool)

    ceiling = np.max(values[defined]) * 1.1 if np.any(defined) else 1.0
    if eps is not None:
        ceiling = max(ceiling, eps * 1.1)
    heights = np.where(defined, values, ceiling)

    colors = ['lightgray'] * len(ordered)
    if clusters:
        cmap = plt.get_cmap(config.color_map, max(len(clusters), 1))
        position = {idx: pos for pos, idx in enumerate(ordered)}
        for cluster_id, members in clusters.items():
            for member in members:
                colors[position[member]] = cmap(cluster_id)

    x_axis = np.arange(len(ordered))
    ax.bar(x_axis, heights, width=1.0, color=colors, edgecolor='none')

    if eps is not None:
        ax.axhline(eps, color='red', linestyle='--', linewidth=1.2, label=f'eps = {eps:g}')
        ax.legend(loc='best', fontsize=10)

    ax.set_title(title, fontsize=14, fontweight='bold')
    ax.set_xlabel('访问顺序', fontsize=12)
    ax.set_ylabel('可达距离', fontsize=12)
    ax.grid(True, axis='y', linestyle='--', alpha=0.6)

    fig.tight_layout()
    _save_figure(fig, save_path, config)

    return fig


def plot_clustering_results(
    points: np.ndarray,
    labels: np.ndarray,
    ground_truth: Optional[np.ndarray] = None,
    save_path: Optional[str] = None,
    config: Optional[VisualizationConfig] = None,
    title: str = '聚类结果可视化'
) -> Figure:
    """
    绘制聚类结果散点图。

    离群点绘制为灰色叉号。维度大于2时先用PCA降到二维，
    一维数据以零作为纵坐标。

    Args:
        points: 数据点数组
        labels: 聚类标签（负值表示离群点或未访问点）
        ground_truth: 真实标签（可选）
        save_path: 保存路径（可选）
        config: 可视化配置
        title: 图形标题

    Returns:
        Figure: matplotlib图形对象
    """
    if config is None:
        config = VisualizationConfig()

    plt.style.use(config.style)

    points = np.asarray(points, dtype=float)
    if points.ndim == 1:
        points = points.reshape(-1, 1)
    if points.shape[1] > 2:
        from sklearn.decomposition import PCA
        points = PCA(n_components=2).fit_transform(points)
    elif points.shape[1] == 1:
        points = np.column_stack([points[:, 0], np.zeros(len(points))])

    labels = np.asarray(labels)
    n_axes = 2 if ground_truth is not None else 1
    fig, axes = plt.subplots(1, n_axes, figsize=config.figure_size, dpi=config.dpi, squeeze=False)
    axes = axes[0]

    panels = [(labels, '聚类结果')]
    if ground_truth is not None:
        panels.insert(0, (np.asarray(ground_truth), '真实标签'))

    for ax, (panel_labels, panel_title) in zip(axes, panels):
        noise = panel_labels < 0
        ax.scatter(points[~noise, 0], points[~noise, 1], c=panel_labels[~noise],
                   cmap=config.color_map, alpha=0.7, s=30)
        if np.any(noise):
            ax.scatter(points[noise, 0], points[noise, 1], c='gray', marker='x',
                       alpha=0.6, s=25, label='离群点')
            ax.legend(loc='best')
        ax.set_title(panel_title if n_axes > 1 else title, fontsize=12)
        ax.set_xlabel('特征1', fontsize=10)
        ax.set_ylabel('特征2', fontsize=10)
        ax.grid(True, linestyle='--', alpha=0.3)

    if n_axes > 1:
        fig.suptitle(title, fontsize=14, fontweight='bold')

    fig.tight_layout()
    _save_figure(fig, save_path, config)

    return fig


def save_evaluation_results(
    results: dict,
    save_path: str,
    metrics_order: Optional[List[str]] = None
) -> None:
    """
    将评估结果保存到文本文件。

    Args:
        results: 评估结果字典
        save_path: 保存路径
        metrics_order: 指标顺序列表
    """
    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(save_path, 'w', encoding='utf-8') as f:
        f.write("评估结果\n")
        f.write("=" * 50 + "\n\n")

        if metrics_order is None:
            metrics_order = list(results.keys())

        for metric in metrics_order:
            if metric not in results:
                continue
            value = results[metric]
            if isinstance(value, float):
                f.write(f"{metric}: {value:.4f}\n")
            else:
                f.write(f"{metric}: {value}\n")

        f.write("\n" + "=" * 50 + "\n")

    print(f"评估结果已保存到: {save_path}")


def save_labels(
    labels: np.ndarray,
    save_path: str,
    reachability: Optional[np.ndarray] = None,
    core_distances: Optional[np.ndarray] = None
) -> pd.DataFrame:
    """
    将每个点的标签（以及可达距离、核心距离）保存为CSV文件。

    Args:
        labels: 标签数组
        save_path: 保存路径
        reachability: 可达距离数组（可选）
        core_distances: 核心距离数组（可选）

    Returns:
        pd.DataFrame: 保存的数据表
    """
    frame = pd.DataFrame({'index': np.arange(len(labels)), 'label': np.asarray(labels)})
    if reachability is not None and len(reachability) == len(labels):
        frame['reachability'] = np.asarray(reachability)
    if core_distances is not None and len(core_distances) == len(labels):
        frame['core_distance'] = np.asarray(core_distances)

    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    frame.to_csv(save_path, index=False)
    print(f"标签已保存到: {save_path}")

    return frame


def create_results_directory(base_path: str = "results") -> str:
    """
    创建结果保存目录。

    Args:
        base_path: 基础路径

    Returns:
        str: 创建的目录路径
    """
    timestamp = np.datetime64('now').astype('datetime64[D]').astype(str).replace('-', '')
    results_dir = os.path.join(base_path, timestamp)
    os.makedirs(results_dir, exist_ok=True)

    for subdir in ['labels', 'plots']:
        os.makedirs(os.path.join(results_dir, subdir), exist_ok=True)

    return results_dir


def show_plots() -> None:
    """
    显示所有待显示的图形。
    """
    plt.show()
