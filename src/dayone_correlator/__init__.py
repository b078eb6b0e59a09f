"""Day One エントリを Jekyll 投稿にタグで紐付ける."""

from .config import CorrelatorConfig, load_config
from .core import DuplicatePolicy, Post, TagTree, normalize_walk
from .correlator import CorrelationResult, Correlator, correlate_site

__version__ = "0.1.0"

__all__ = [
    "CorrelatorConfig",
    "load_config",
    "DuplicatePolicy",
    "Post",
    "TagTree",
    "normalize_walk",
    "CorrelationResult",
    "Correlator",
    "correlate_site",
]
