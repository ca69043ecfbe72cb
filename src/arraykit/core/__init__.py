"""Shape rules, dotted paths, equality, errors and configuration.

Nothing in here imports the container classes.
"""
