from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NamedSeries(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: str = Field(..., description="Mermaid palette color, also shown in the legend")
    name: str
    data: tuple[float, ...]


class YAxis(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    range: Optional[str] = Field(None, description='Literal mermaid range, e.g. "0 --> 100"')


class RenderGroup(BaseModel):
    """One chart: named series sharing a time axis, first series drawn on top."""

    model_config = ConfigDict(frozen=True)

    title: str
    series: tuple[NamedSeries, ...]
    times: tuple[datetime, ...]
    y_axis: YAxis
    step_name: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return bool(self.series) and bool(self.times)
