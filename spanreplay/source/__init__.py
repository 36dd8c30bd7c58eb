from .base import SpanSource
from .database import DatabaseSpanSource, build_query

__all__ = ["SpanSource", "DatabaseSpanSource", "build_query"]
