from fastapi import Request

from metrics_sampler.collection.sampler import Sampler


def get_sampler(request: Request) -> Sampler:
    return request.app.state.sampler  # type: ignore[return-value]
