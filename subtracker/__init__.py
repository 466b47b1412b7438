"""
Subscription Tracker - Source Package

Tracks recurring subscription payments and answers two questions:
how much do I spend per month/year, and what charges fall on a given day.

DESIGN PRINCIPLES:
1. Everything derived (next due date, totals, calendar events) is recomputed
2. "Now" is always passed in, never sampled deep inside the engine
3. Calendar arithmetic rolls over, it never clamps
4. Every change to the collection is auditable
"""

__version__ = "1.0.0"
__author__ = "Subscription Tracker Team"
