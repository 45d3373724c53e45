"""Helpers shared by the CLI and the core models."""

from .convert_utils import ConvertUtils

__all__ = ["ConvertUtils"]
