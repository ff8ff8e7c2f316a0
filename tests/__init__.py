"""Test package for the NeuroPrime trainer.

Core tests drive generators, round state machines and sessions with seeded
RNGs and a fake clock. UI smoke tests run pygame with the SDL dummy drivers so
no real window opens. Run ``pytest`` from the project root.
"""
