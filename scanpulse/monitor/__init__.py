"""scanpulse terminal display.

Modules
-------
renderer
    ``StatusRenderer`` drains the event channel, keeps the last known
    stats/timing values, and redraws a single in-place status line while
    writing other scanner output above it.
"""
