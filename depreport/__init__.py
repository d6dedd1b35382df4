"""depreport - structured model of Gradle dependency reports."""

__version__ = "0.1.0"
