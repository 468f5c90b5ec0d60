"""Scheduled jobs that run outside the request cycle."""
