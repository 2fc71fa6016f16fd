"""Shared helpers for the test suite."""


def kinds(sequence):
    return [token.kind for token in sequence]


def values(sequence):
    return [token.value for token in sequence]
