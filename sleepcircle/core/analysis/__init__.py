"""
Analysis module for sleep data insights.

This module contains functions for summarising a user's recent
sleep records.
"""

from sleepcircle.core.analysis.sleep_metrics import calculate_sleep_metrics, generate_weekly_summary

__all__ = ['calculate_sleep_metrics', 'generate_weekly_summary']
