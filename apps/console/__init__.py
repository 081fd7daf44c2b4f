"""Tactical console HTTP service."""
