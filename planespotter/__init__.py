"""Planespotter: notify about aircraft passing near a fixed observer."""
