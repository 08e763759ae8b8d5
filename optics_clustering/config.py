"""
配置文件

该模块提供了项目的默认配置参数，
包括聚类配置、可视化配置、数据配置等。
"""

from dataclasses import asdict, dataclass, field
from typing import List, Dict, Any, Optional, Tuple

from .clustering.optics import OpticsConfig


@dataclass
class PlotConfig:
    """
    绘图默认配置。
    """
    figure_size: Tuple[int, int] = (12, 6)
    dpi: int = 100
    save_format: str = 'png'
    style: str = 'default'
    color_map: str = 'viridis'


@dataclass
class DataConfig:
    """
    数据路径默认配置。
    """
    results_directory: str = "results"
    columns: List[str] = field(default_factory=list)
    label_column: Optional[str] = None
    standardize: bool = False


class Config:
    """
    项目配置单例类。

    该类整合所有配置，提供统一的配置访问接口。

    Example:
        >>> config = Config()
        >>> config.optics.eps
        0.5
        >>> config.optics.min_samples
        5
    """

    _instance: Optional['Config'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.optics = OpticsConfig()
        self.plot = PlotConfig()
        self.data = DataConfig()

        self._initialized = True

    def get_optics_params(self) -> Dict[str, Any]:
        """
        获取 OPTICS 参数字典。

        Returns:
            Dict[str, Any]: OPTICS 参数
        """
        return {
            'eps': self.optics.eps,
            'min_samples': self.optics.min_samples,
            'metric': self.optics.metric,
            'n_jobs': self.optics.n_jobs,
        }

    def get_plot_params(self) -> Dict[str, Any]:
        """
        获取绘图参数字典。

        Returns:
            Dict[str, Any]: 绘图参数
        """
        return asdict(self.plot)

    def update_from_dict(self, config_dict: Dict[str, Any]) -> None:
        """
        从字典更新配置。

        Args:
            config_dict: 配置字典
        """
        for key, value in config_dict.items():
            if hasattr(self, key):
                if isinstance(value, dict):
                    current_obj = getattr(self, key)
                    for sub_key, sub_value in value.items():
                        if hasattr(current_obj, sub_key):
                            if sub_key == 'figure_size':
                                sub_value = tuple(sub_value)
                            setattr(current_obj, sub_key, sub_value)
                else:
                    setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """
        将配置转换为可序列化的字典。

        非字符串的度量对象以其名称保存。

        Returns:
            Dict[str, Any]: 配置字典
        """
        optics = dict(self.optics.__dict__)
        if not isinstance(optics['metric'], str):
            optics['metric'] = getattr(optics['metric'], 'name', str(optics['metric']))

        return {
            'optics': optics,
            'plot': {**self.plot.__dict__, 'figure_size': list(self.plot.figure_size)},
            'data': dict(self.data.__dict__),
        }

    def save_config(self, path: str) -> None:
        """
        保存配置到文件。

        Args:
            path: 保存路径
        """
        import json

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

        print(f"配置已保存到: {path}")

    def load_config(self, path: str) -> None:
        """
        从文件加载配置。

        Args:
            path: 配置文件路径
        """
        import json

        with open(path, 'r', encoding='utf-8') as f:
            config_dict = json.load(f)

        self.update_from_dict(config_dict)
        print(f"配置已从 {path} 加载")


def get_default_config() -> Config:
    """
    获取默认配置单例。

    Returns:
        Config: 默认配置对象
    """
    return Config()


def reset_config() -> None:
    """
    重置配置为默认值。
    """
    Config._instance = None
