"""Manuscript journal components."""
