"""Markov-chain and birth-death models of multi-server queues with DVFS speed levels."""

__version__ = "0.1.0"