from .charts import build_render_groups
from .labels import LABEL_BUDGET, thin_time_labels
from .models import NamedSeries, RenderGroup, YAxis
from .renderer import ChartRenderer
from .stacking import StackingError, stack_layers

__all__ = [
    "LABEL_BUDGET",
    "ChartRenderer",
    "NamedSeries",
    "RenderGroup",
    "StackingError",
    "YAxis",
    "build_render_groups",
    "stack_layers",
    "thin_time_labels",
]
