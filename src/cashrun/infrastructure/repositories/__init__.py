"""Repositories encapsulating SQL for the cashrun store."""
