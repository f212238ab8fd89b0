class Endpoints:
    """Centralised sampler HTTP route and address definitions"""

    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 7777

    # Routes served by the sampler
    SNAPSHOT = "/metrics"
    SHUTDOWN = "/shutdown"
    HEALTH = "/healthz"
    READY = "/readyz"
    PROMETHEUS = "/prometheus"

    @classmethod
    def base_url(cls, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> str:
        """Build the sampler base URL for a host/port pair."""
        return f"http://{host}:{port}"

    @classmethod
    def url(cls, route: str, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> str:
        """Build an absolute URL for one of the sampler routes."""
        if not route.startswith("/"):
            raise ValueError(f"Route must start with '/': {route}")
        return cls.base_url(host, port) + route
