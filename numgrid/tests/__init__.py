"""Tests for numgrid."""
