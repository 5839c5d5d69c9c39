"""Framework for building command line applications: commands, options, styled output, prompts and injection."""

__version__ = "1.0.0"