"""
Constants used throughout the Sleep Circle app.
This includes quality thresholds, score mappings, display placeholders and
the fixed advisory messages.
"""

# Wire formats at the core boundary
CLOCK_TIME_FORMAT = '%H:%M'
DATE_FORMAT = '%Y-%m-%d'

# Returned by the minute conversions for a missing time
ABSENT_TIME = -1

# Hours before noon are treated as having rolled past midnight on the bedtime scale
ROLLOVER_HOUR = 12
# Longest interval elapsed_hours reports; results stay below a full day
MAX_ELAPSED_HOURS = 23.9

# Duration thresholds (hours) for deriving sleep quality.
# Good uses a strict > 6.0 and Poor a strict < 5.0, everything else is Fair.
quality_thresholds = {
    'excellent_above': 7.5,
    'good_above': 6.0,
    'poor_below': 5.0,
}

# Display score projected from a completed record's quality
quality_scores = {
    'Excellent': 95,
    'Good': 85,
    'Fair': 70,
}
DEFAULT_COMPLETE_SCORE = 60
SLEEPING_SCORE = 0

# Leaderboard display placeholders
MISSING_TIME_PLACEHOLDER = '--:--'
SLEEPING_PLACEHOLDER = 'Sleeping'

# Weekly summary rule table
default_values = {
    'summary_window_days': 7,
    'summary_incomplete_limit': 2,  # more than this many open nights
    'summary_min_complete_strong': 5,
    'summary_min_complete_balanced': 3,
    'summary_excellent_average': 7.5,
    'summary_steady_average': 6.0,
}

weekly_summary_messages = {
    'empty': 'Begin tonight.',
    'dreaming': 'Dreams vivid lately.',
    'radiant': 'Radiating energy.',
    'steady': 'Steady rhythm.',
    'building': 'Building habits.',
    'balanced': 'Finding balance.',
    'gentle': 'Be gentle tonight.',
}

# Advisory values substituted when the annotator is unavailable
fallback_analysis = {
    'incomplete': {
        'score': 0,
        'insight': "Looks like you're still dreaming!",
        'suggestion': "Don't forget to stop the timer when you wake up.",
    },
    'complete': {
        'score': 85,
        'insight': 'Analysis unavailable currently.',
        'suggestion': 'Try to maintain a consistent schedule.',
    },
}

# Avatar colours handed out to newly signed-in users
avatar_colors = [
    'bg-indigo-500', 'bg-blue-500', 'bg-purple-500', 'bg-pink-500',
    'bg-red-500', 'bg-orange-500', 'bg-amber-500', 'bg-green-500'
]
