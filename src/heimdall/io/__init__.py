"""Input/output for heimdall."""
