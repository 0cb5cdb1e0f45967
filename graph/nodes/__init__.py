from .build_charts import build_charts
from .gather_context import gather_context
from .generate_signal import generate_signal

__all__ = ["build_charts", "gather_context", "generate_signal"]
