"""AI package exports."""

from .targeting import HuntTargetStrategy, TargetingMode, TargetingResult

__all__ = ["HuntTargetStrategy", "TargetingMode", "TargetingResult"]
