"""Deterministic test data builders."""
