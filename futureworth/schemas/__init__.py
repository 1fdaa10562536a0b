"""Pydantic data contracts for simulation inputs and results."""
