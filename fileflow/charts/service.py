"""Chart definitions bound to approved files."""
import logging
from typing import Any

from fileflow.auth.roles import ADMIN_ROLES, authorize_owner_or_role
from fileflow.errors import NotFound, ValidationError
from fileflow.files.parser import column_names
from fileflow.files.service import get_file
from fileflow.schemas.chart import ChartSeries, SeriesPoint
from fileflow.schemas.enums import ChartType, FileStatus
from fileflow.schemas.records import ChartRecord, UserRecord
from fileflow.storage.base import Storage

logger = logging.getLogger(__name__)


def create_chart(
    storage: Storage,
    caller: UserRecord,
    file_id: str,
    title: str,
    type: ChartType | str,
    x_axis: str,
    y_axis: str,
    config: dict[str, Any] | None = None,
) -> ChartRecord:
    source = get_file(storage, file_id, caller)
    if source.status != FileStatus.APPROVED.value:
        raise ValidationError("File must be approved before creating charts")

    columns = column_names(source.data)
    missing = [axis for axis in (x_axis, y_axis) if axis not in columns]
    if missing:
        raise ValidationError(
            f"Unknown column(s): {', '.join(missing)}",
            errors=[{"field": "xAxis" if axis == x_axis else "yAxis", "column": axis, "available": columns}
                    for axis in missing],
        )

    chart = storage.create_chart(
        user_id=caller.id,
        file_id=file_id,
        title=title,
        type=ChartType(type).value,
        x_axis=x_axis,
        y_axis=y_axis,
        config=config,
    )
    logger.info("Chart %s (%s) created on file %s by %s", chart.id, chart.type, file_id, caller.id)
    return chart


def list_user_charts(storage: Storage, user: UserRecord) -> list[ChartRecord]:
    return storage.list_charts_by_user(user.id)


def list_file_charts(storage: Storage, file_id: str, caller: UserRecord) -> list[ChartRecord]:
    get_file(storage, file_id, caller)
    return storage.list_charts_by_file(file_id)


def _as_number(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number == number else 0.0


def _label(value: Any, index: int) -> Any:
    if value is None or value == "":
        return f"Item {index}"
    return value


def chart_series(storage: Storage, chart_id: str, caller: UserRecord) -> ChartSeries:
    chart = storage.get_chart(chart_id)
    if chart is None:
        raise NotFound("Chart not found")
    authorize_owner_or_role(caller, chart.user_id, ADMIN_ROLES)

    source = storage.get_file(chart.file_id)
    if source is None:
        raise NotFound("File not found")

    points = [
        SeriesPoint(name=_label(row.get(chart.x_axis), index), value=_as_number(row.get(chart.y_axis)))
        for index, row in enumerate(source.data, start=1)
    ]
    return ChartSeries(
        chart_id=chart.id,
        title=chart.title,
        type=chart.type,
        x_axis=chart.x_axis,
        y_axis=chart.y_axis,
        points=points,
    )
