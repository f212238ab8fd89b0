"""Post-run step that turns a sampler snapshot into a job-summary report."""

__version__ = "0.3.0"
