"""Secondary structure representations, rate models, stochastic folding simulation, macrostates and time courses."""

__version__ = "0.1.2"