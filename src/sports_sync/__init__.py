"""Sports Schedule Sync.

Keeps a Google Calendar in step with a hand-maintained sports staffing
spreadsheet. The spreadsheet is the source of truth; calendar entries created
by this tool are created, updated and deleted to match it, and every other
entry on the calendar is left alone.
"""

__version__ = "0.1.0"
