from .config import Config, load_config
from .models import SpanRecord
from .source import DatabaseSpanSource, SpanSource
from .tracing import ReplayRun, ReplaySummary, SpanReplayer

__all__ = [
    # Config
    "Config",
    "load_config",
    # Models
    "SpanRecord",
    # Source
    "SpanSource",
    "DatabaseSpanSource",
    # Tracing
    "ReplayRun",
    "ReplaySummary",
    "SpanReplayer",
]
