"""
Football Moneyball

Match outcome prediction from recent team form using a Poisson scoreline model.
"""

__version__ = "1.0.0"
