"""Calculation methods and prayer time helpers."""
