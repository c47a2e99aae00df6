"""
CLI commands. Each command lives in its own module.
"""
