from enum import Enum


class Environment(str, Enum):
    """Environments the sampler and report step run in."""

    PRODUCTION = "production"
    CI = "ci"
    TESTING = "testing"
    DEVELOPMENT = "development"

    @classmethod
    def parse(cls, env: str) -> "Environment":
        """Map a free-form environment name, defaulting to production."""
        try:
            return cls(env.strip().lower())
        except ValueError:
            return cls.PRODUCTION

    @classmethod
    def is_testing(cls, env: str) -> bool:
        return cls.parse(env) is cls.TESTING

    @classmethod
    def wants_plain_logs(cls, env: str) -> bool:
        """Human-readable log lines instead of JSON for local work."""
        return cls.parse(env) in (cls.DEVELOPMENT, cls.TESTING)
