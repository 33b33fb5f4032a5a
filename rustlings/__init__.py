"""Runner for small Rust exercises: compile, test, track progress and show hints."""

__version__ = "5.5.1"