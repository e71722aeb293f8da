"""Scout-side systems: the weekly calendar, activity quality and regional knowledge."""
