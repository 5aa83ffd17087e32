"""
Module for calculating the rolling weekly summary shown on the dashboard.
"""

import logging

import pandas as pd

from sleepcircle.core.models.output_models import WeeklySummary
from sleepcircle.utils.constants import default_values, weekly_summary_messages

logger = logging.getLogger(__name__)


def calculate_sleep_metrics(sleep_data):
    """
    Calculate counts and mean duration over a window of records.

    Args:
        sleep_data: DataFrame of sleep records (status and duration columns)

    Returns:
        dict: complete_count, incomplete_count and average_duration
    """
    if sleep_data is None or len(sleep_data) == 0:
        return {'complete_count': 0, 'incomplete_count': 0, 'average_duration': 0.0}

    data = sleep_data.copy()
    data['duration'] = pd.to_numeric(data['duration'], errors='coerce').fillna(0.0)

    complete_count = int((data['status'] == 'complete').sum())
    incomplete_count = int((data['status'] == 'incomplete').sum())

    # Mean over complete nights only
    total_duration = float(data['duration'].sum())
    average_duration = total_duration / complete_count if complete_count > 0 else 0.0

    return {
        'complete_count': complete_count,
        'incomplete_count': incomplete_count,
        'average_duration': average_duration,
    }


def select_summary_message(metrics, has_records=True):
    """Pick the fixed advisory message for a window's metrics"""
    if not has_records:
        return weekly_summary_messages['empty']

    if metrics['incomplete_count'] > default_values['summary_incomplete_limit']:
        return weekly_summary_messages['dreaming']

    if metrics['complete_count'] >= default_values['summary_min_complete_strong']:
        if metrics['average_duration'] > default_values['summary_excellent_average']:
            return weekly_summary_messages['radiant']
        if metrics['average_duration'] > default_values['summary_steady_average']:
            return weekly_summary_messages['steady']
        return weekly_summary_messages['building']

    if metrics['complete_count'] >= default_values['summary_min_complete_balanced']:
        return weekly_summary_messages['balanced']

    return weekly_summary_messages['gentle']


def generate_weekly_summary(sleep_data, window_days=None):
    """
    Build the weekly summary for the most recent records.

    Args:
        sleep_data: DataFrame of the recent window, oldest first
        window_days: Window size the data was taken with

    Returns:
        WeeklySummary: Counts, mean duration and message
    """
    window_days = window_days or default_values['summary_window_days']
    metrics = calculate_sleep_metrics(sleep_data)
    has_records = sleep_data is not None and len(sleep_data) > 0
    message = select_summary_message(metrics, has_records)

    logger.debug(f"Weekly summary over {window_days} days: {metrics} -> {message!r}")

    return WeeklySummary(
        window_days=window_days,
        complete_count=metrics['complete_count'],
        incomplete_count=metrics['incomplete_count'],
        average_duration=round(metrics['average_duration'], 2),
        message=message,
    )
