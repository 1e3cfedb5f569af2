"""
Infrastructure adapters: frame capture, external analyzer, reporting and broadcast.
"""
