"""
Recommendation module for sleep insights.

This module contains the annotator contract and the default offline
annotator that turns a finished sleep record into advisory text.
"""

from sleepcircle.core.recommendation.annotator import BaseAnnotator, RuleBasedAnnotator, fallback_analysis

__all__ = ['BaseAnnotator', 'RuleBasedAnnotator', 'fallback_analysis']
