"""Markov-chain baseball game simulator.

Two teams, each modeled as an absorbing Markov chain over the 24 base/out
states plus three outs. Supports play-by-play stepping and Monte Carlo
estimation of win probabilities and expected scores.
"""

__version__ = "0.1.0"
