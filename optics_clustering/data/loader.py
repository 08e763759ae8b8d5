"""
点集加载模块

该模块负责从文件加载待聚类的点集，支持以下格式：
- CSV: 使用 pandas 读取，可指定特征列和标签列
- MAT: 使用 scipy 读取，特征矩阵键默认为 'fea'，标签键默认为 'gnd'
- NPY: numpy 数组文件
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple
import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler


SUPPORTED_FORMATS = ('.csv', '.mat', '.npy')


@dataclass
class PointSetConfig:
    """
    点集加载配置类。

    Attributes:
        file_path (str): 数据文件路径
        columns (List[str]): CSV 特征列名列表，为空时使用除标签列外的所有数值列
        label_column (Optional[str]): CSV 真实标签列名
        feature_key (str): MAT 文件中特征矩阵的键
        label_key (str): MAT 文件中标签的键
        standardize (bool): 是否对特征进行标准化
    """
    file_path: str
    columns: List[str] = field(default_factory=list)
    label_column: Optional[str] = None
    feature_key: str = 'fea'
    label_key: str = 'gnd'
    standardize: bool = False


class PointSetLoader:
    """
    点集加载器。

    Attributes:
        config (PointSetConfig): 加载配置
        scaler (Optional[StandardScaler]): 特征缩放器（仅在标准化时创建）
    """

    def __init__(self, config: PointSetConfig) -> None:
        self.config = config
        self.scaler: Optional[StandardScaler] = None

    def load(self) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        """
        加载点集和（可选的）真实标签。

        Returns:
            Tuple[np.ndarray, Optional[np.ndarray]]: (点集 [n_points, n_features], 真实标签)

        Raises:
            FileNotFoundError: 如果文件不存在
            ValueError: 如果文件格式不受支持或数据无效
        """
        path = Path(self.config.file_path)
        if not path.exists():
            raise FileNotFoundError(f"数据文件不存在: {path}")

        suffix = path.suffix.lower()
        if suffix == '.csv':
            points, labels = self._load_csv(path)
        elif suffix == '.mat':
            points, labels = self._load_mat(path)
        elif suffix == '.npy':
            points, labels = np.load(path), None
        else:
            raise ValueError(f"不支持的数据格式: {suffix}，可选: {SUPPORTED_FORMATS}")

        points = np.asarray(points, dtype=float)
        if points.ndim == 1:
            points = points.reshape(-1, 1)
        if points.ndim != 2:
            raise ValueError(f"点集必须是二维数组，当前维度: {points.ndim}")

        if self.config.standardize and len(points) > 0:
            self.scaler = StandardScaler()
            points = self.scaler.fit_transform(points)

        return points, labels

    def _load_csv(self, path: Path) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        data = pd.read_csv(path)
        label_column = self.config.label_column

        if label_column is not None and label_column not in data.columns:
            raise ValueError(f"CSV 文件中缺少标签列: {label_column}")

        columns = list(self.config.columns)
        if not columns:
            columns = [col for col in data.columns
                       if col != label_column and np.issubdtype(data[col].dtype, np.number)]
        self._validate_columns(data, columns)

        labels = data[label_column].to_numpy() if label_column is not None else None
        return data[columns].to_numpy(dtype=float), labels

    def _load_mat(self, path: Path) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        from scipy.io import loadmat

        mat_data = loadmat(str(path))
        if self.config.feature_key not in mat_data:
            raise ValueError(f"MAT 文件中缺少特征矩阵: {self.config.feature_key}")

        labels = mat_data.get(self.config.label_key)
        if labels is not None:
            labels = np.asarray(labels).ravel()
        return mat_data[self.config.feature_key], labels

    @staticmethod
    def _validate_columns(data: pd.DataFrame, columns: List[str]) -> None:
        """
        验证特征列的有效性。

        Args:
            data: 加载的数据DataFrame
            columns: 特征列名列表

        Raises:
            ValueError: 如果缺少列或列不是数值类型
        """
        if not columns:
            raise ValueError("CSV 文件中没有可用的数值特征列")

        missing_cols = [col for col in columns if col not in data.columns]
        if missing_cols:
            raise ValueError(f"CSV 文件中缺少以下列: {missing_cols}")

        for col in columns:
            if not np.issubdtype(data[col].dtype, np.number):
                raise ValueError(f"列 '{col}' 不是数值类型")


def load_points(
    file_path: str,
    columns: Optional[List[str]] = None,
    label_column: Optional[str] = None,
    standardize: bool = False
) -> Tuple[np.ndarray, Optional[np.ndarray]]:
    """
    加载点集的便捷函数。

    Args:
        file_path: 数据文件路径
        columns: CSV 特征列名列表
        label_column: CSV 真实标签列名
        standardize: 是否标准化

    Returns:
        Tuple[np.ndarray, Optional[np.ndarray]]: (点集, 真实标签)

    Example:
        >>> points, labels = load_points('data/blobs.csv', label_column='label')
    """
    config = PointSetConfig(
        file_path=file_path,
        columns=list(columns) if columns else [],
        label_column=label_column,
        standardize=standardize
    )
    return PointSetLoader(config).load()
