"""Dependency graph engine: resolver, assembler, cycle detector and filter."""
