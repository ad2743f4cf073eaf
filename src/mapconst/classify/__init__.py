"""Constant classification by declared type."""

from mapconst.classify.consts import classify, classify_group, collect_constants

__all__ = ["classify", "classify_group", "collect_constants"]
