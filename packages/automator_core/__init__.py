"""Application wiring for the Task Automator HTTP API."""
