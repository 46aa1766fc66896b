"""Weekly Check-in Tracker package.

Organized by feature modules (weeks, counters, history, roster, checkins)
with a thin Flask controller layer over service/repository layers.
"""
