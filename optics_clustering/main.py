#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
optics_clustering 主程序入口

该模块提供了命令行入口，对文件中的点集执行 OPTICS 聚类，
并可以在同一次运行中以多个阈值重新提取簇。

使用方法：
    python -m optics_clustering.main --data_path=data/points.csv --eps=0.5 --min_samples=5
    python -m optics_clustering.main --data_path=data/dataset.mat --eps=1.0 --extract_eps 0.5 0.8
    optics-cluster --data_path=data/points.npy --metric=manhattan --n_jobs=-1

主要功能：
- 支持多种输入数据格式（CSV、MAT、NPY）
- 输出聚类统计、标签文件和评估结果
- 绘制可达性图和聚类散点图
"""

import argparse
import os
import sys
import time
from typing import Any, Dict, List, Optional

from .clustering import Optics, available_metrics
from .config import get_default_config
from .data import load_points
from .utils import (
    EvaluationMetrics,
    VisualizationConfig,
    clusters_to_labels,
    plot_clustering_results,
    plot_reachability,
    save_evaluation_results,
    save_labels,
)


def run_clustering_task(
    data_path: str,
    results_dir: str,
    eps: float = 0.5,
    min_samples: int = 5,
    metric: str = "euclidean",
    extract_eps: Optional[List[float]] = None,
    columns: Optional[List[str]] = None,
    label_column: Optional[str] = None,
    standardize: bool = False,
    n_jobs: Optional[int] = None,
    plot: bool = True,
    visualization: Optional[VisualizationConfig] = None,
) -> Dict[str, Any]:
    """
    运行 OPTICS 聚类任务。

    Args:
        data_path: 数据文件路径
        results_dir: 结果保存目录
        eps: 邻域半径
        min_samples: 核心点所需的最小邻居数
        metric: 距离度量名称
        extract_eps: 额外的提取阈值列表
        columns: CSV 特征列名列表
        label_column: CSV 真实标签列名
        standardize: 是否标准化
        n_jobs: 并行工作数
        plot: 是否绘图
        visualization: 可视化配置

    Returns:
        Dict[str, Any]: 以阈值为键的评估结果字典
    """
    print("\n" + "=" * 60)
    print("OPTICS 密度聚类任务")
    print("=" * 60)

    print(f"\n加载数据: {data_path}")
    points, ground_truth = load_points(data_path, columns=columns, label_column=label_column, standardize=standardize)
    print(f"点数: {len(points)}，特征维度: {points.shape[1]}")

    model = Optics(eps=eps, min_samples=min_samples, metric=metric, n_jobs=n_jobs, verbose=True)
    clusters, outliers = model.fit(points)

    os.makedirs(results_dir, exist_ok=True)
    evaluator = EvaluationMetrics()
    all_results: Dict[str, Any] = {}

    thresholds = [eps] + [t for t in (extract_eps or []) if t != eps]
    for threshold in thresholds:
        if threshold > eps:
            print(f"\n跳过阈值 {threshold}：提取阈值不能大于构建半径 {eps}")
            continue

        if threshold != eps:
            clusters, outliers = model.extract(threshold)

        results = evaluator.evaluate(clusters, outliers, len(points), ground_truth)
        evaluator.print_results(results, title=f"OPTICS (eps'={threshold:g})")

        tag = f"eps_{threshold:g}"
        save_evaluation_results(results, os.path.join(results_dir, f"evaluation_{tag}.txt"))

        labels = clusters_to_labels(clusters, outliers, len(points))
        save_labels(labels, os.path.join(results_dir, f"labels_{tag}.csv"),
                    reachability=model.reachability_, core_distances=model.core_distances_)

        if plot and len(points) > 0:
            import matplotlib.pyplot as plt

            fig = plot_reachability(model.ordered_, model.reachability_, eps=threshold, clusters=clusters,
                                    save_path=os.path.join(results_dir, f"reachability_{tag}.png"),
                                    config=visualization)
            plt.close(fig)
            fig = plot_clustering_results(points, labels, ground_truth=ground_truth,
                                          save_path=os.path.join(results_dir, f"clusters_{tag}.png"),
                                          config=visualization)
            plt.close(fig)

        all_results[tag] = results

    return all_results


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    解析命令行参数。

    Args:
        argv: 参数列表，默认为 sys.argv

    Returns:
        argparse.Namespace: 解析后的参数
    """
    parser = argparse.ArgumentParser(
        description="optics_clustering - OPTICS 密度聚类工具",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--data_path",
        type=str,
        required=True,
        help="数据文件路径（CSV、MAT 或 NPY）",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON 配置文件路径，命令行参数会覆盖其中的值",
    )

    parser.add_argument(
        "--eps",
        type=float,
        default=None,
        help="邻域半径",
    )

    parser.add_argument(
        "--min_samples",
        type=int,
        default=None,
        help="核心点所需的最小邻居数",
    )

    parser.add_argument(
        "--metric",
        type=str,
        default=None,
        choices=available_metrics(),
        help="距离度量",
    )

    parser.add_argument(
        "--extract_eps",
        type=float,
        nargs="*",
        default=[],
        help="额外的提取阈值（不大于 eps）",
    )

    parser.add_argument(
        "--columns",
        type=str,
        nargs="*",
        default=None,
        help="CSV 特征列名",
    )

    parser.add_argument(
        "--label_column",
        type=str,
        default=None,
        help="CSV 真实标签列名",
    )

    parser.add_argument(
        "--standardize",
        action="store_true",
        help="对特征进行标准化",
    )

    parser.add_argument(
        "--n_jobs",
        type=int,
        default=None,
        help="邻域构建的并行工作数（-1 表示全部CPU）",
    )

    parser.add_argument(
        "--results_dir",
        type=str,
        default=None,
        help="结果保存目录",
    )

    parser.add_argument(
        "--no_plot",
        action="store_true",
        help="不绘制图形",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """
    主函数入口。

    解析命令行参数，合并配置并调用聚类任务。
    """
    args = parse_arguments(argv)

    print("\n" + "=" * 60)
    print("optics_clustering - OPTICS 密度聚类工具")
    print("=" * 60)

    config = get_default_config()
    if args.config:
        config.load_config(args.config)

    start_time = time.time()

    try:
        run_clustering_task(
            data_path=args.data_path,
            results_dir=args.results_dir or config.data.results_directory,
            eps=args.eps if args.eps is not None else config.optics.eps,
            min_samples=args.min_samples if args.min_samples is not None else config.optics.min_samples,
            metric=args.metric or config.optics.metric,
            extract_eps=args.extract_eps,
            columns=args.columns or config.data.columns,
            label_column=args.label_column or config.data.label_column,
            standardize=args.standardize or config.data.standardize,
            n_jobs=args.n_jobs if args.n_jobs is not None else config.optics.n_jobs,
            plot=not args.no_plot,
            visualization=VisualizationConfig(**config.get_plot_params()),
        )

    except KeyboardInterrupt:
        print("\n用户中断执行")
        sys.exit(0)
    except Exception as e:
        print(f"\n执行出错: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"程序执行完成，总时间: {time.time() - start_time:.2f}秒")
    print("=" * 60)


if __name__ == "__main__":
    main()
