"""PitchQuiz: a single-screen absolute pitch ear-training quiz."""

__version__ = "0.1.0"

__all__ = ["__version__"]
