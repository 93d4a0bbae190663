#!/usr/bin/env python
"""
Workout calendar CLI runner.

Usage:
    python run.py month [--month 2024-03]   # show the month grid
    python run.py day 2024-03-15            # list workouts for a day
    python run.py add 2024-03-15 -t Legs -r 4
    python run.py edit <id> --rating 5      # edit a workout
    python run.py delete <id>               # delete a workout
    python run.py week                      # workouts this week
    python run.py export [--month 2024-03]  # export month to JSON
    python run.py plot --no-show            # generate charts
"""

import sys
from pathlib import Path

# add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from workout_calendar.main import main

if __name__ == "__main__":
    main()
