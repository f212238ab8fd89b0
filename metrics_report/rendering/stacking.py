from typing import Sequence


class StackingError(ValueError):
    """Series handed to the stacker do not share one length."""


def stack_layers(series: Sequence[Sequence[float]]) -> list[list[float]]:
    """Cumulative layers for a stacked bar chart.

    The last series is the base layer; every earlier series is added on top of
    everything listed after it, so ``result[0]`` is the running total of all
    series. Negative values are stacked as-is.

    >>> stack_layers([[10, 20, 30], [5, 10, 15]])
    [[15, 30, 45], [5, 10, 15]]
    """
    if not series:
        return []
    length = len(series[0])
    for index, values in enumerate(series):
        if len(values) != length:
            raise StackingError(
                f"Series {index} has {len(values)} points, expected {length}"
            )

    layers: list[list[float]] = []
    running: list[float] = [0] * length
    for values in reversed(series):
        running = [below + v for below, v in zip(running, values)]
        layers.append(running)
    layers.reverse()
    return layers
