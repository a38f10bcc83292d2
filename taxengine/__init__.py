"""Canadian personal income tax estimation and RRSP/TFSA optimization engine."""

__version__ = "0.1.0"
