"""
learnkit

Online-learning service: stateful bandits and black-box optimizers behind a
FastAPI interface.
"""

__version__ = "1.0.0"
