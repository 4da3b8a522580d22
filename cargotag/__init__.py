"""Create an annotated git tag from the version in a Cargo manifest."""

__version__ = "0.1.0"
