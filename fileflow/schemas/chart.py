
from typing import Any
from pydantic import Field
from fileflow.schemas.enums import ChartType
from fileflow.schemas.records import Record

class ChartCreate(Record):
    file_id: str
    title: str = Field(min_length=1, max_length=255)
    type: ChartType
    x_axis: str = Field(min_length=1)
    y_axis: str = Field(min_length=1)
    config: dict[str, Any] | None = None

class SeriesPoint(Record):
    name: Any
    value: float

class ChartSeries(Record):
    chart_id: str
    title: str
    type: ChartType
    x_axis: str
    y_axis: str
    points: list[SeriesPoint]
