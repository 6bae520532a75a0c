"""
learn-helper: flashcard study engine.

Packages:
- core: Card domain model and error types
- study: Answer grading, session building, phase state machine, results
- delivery: JSON deck loading and the terminal driver
"""

__version__ = "1.0.0"
