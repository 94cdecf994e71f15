from behavior.engine import finalize, recompute

__all__ = ["finalize", "recompute"]
