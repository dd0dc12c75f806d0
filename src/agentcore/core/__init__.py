"""Core building blocks: constants, errors, configuration and logging."""
