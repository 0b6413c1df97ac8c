"""Strategy evaluation by simulated play."""

from hearts.evaluation.arena import Arena

__all__ = ['Arena']
