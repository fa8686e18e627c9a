"""Employee work-hour tracking and payroll API."""
