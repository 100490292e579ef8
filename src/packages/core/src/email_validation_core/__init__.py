"""Bulk email validation core: record decoding, validation jobs and job state."""
