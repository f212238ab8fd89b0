"""Background CPU/memory sampler served over a local HTTP endpoint."""

__version__ = "0.3.0"
