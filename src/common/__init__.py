"""Shared helpers for ReleaseGate."""
