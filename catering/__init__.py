"""Catering operations tools."""
