"""Evaluation tools module."""

from .metrics import Metrics, Evaluator

__all__ = ['Metrics', 'Evaluator']
