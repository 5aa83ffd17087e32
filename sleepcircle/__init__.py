
"""
Core modules for the Sleep Circle app.

This package contains the core functionality for:
- Sleep record lifecycle and time arithmetic
- Sleep quality and score derivation
- Weekly summaries
- Leaderboard cohorts and ranking
- The HTTP API
"""
