"""VitalTrack: daily check-ins, workouts and weight logs with derived summaries.

Modules: config, models, metrics, trend, formatting, store, state, tables.
"""

__version__ = "0.1.0"
