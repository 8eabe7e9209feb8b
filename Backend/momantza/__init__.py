"""Momantza venue-booking backend."""
