
from fastapi import APIRouter, Depends
from fileflow.auth.deps import get_storage, get_current_user
from fileflow.charts import service
from fileflow.schemas.chart import ChartCreate, ChartSeries
from fileflow.schemas.records import ChartRecord, UserRecord
from fileflow.storage.base import Storage

router = APIRouter(prefix="/api/charts", tags=["charts"])

@router.post("", response_model=ChartRecord)
def create_chart(body: ChartCreate, storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.create_chart(
        storage,
        user,
        file_id=body.file_id,
        title=body.title,
        type=body.type,
        x_axis=body.x_axis,
        y_axis=body.y_axis,
        config=body.config,
    )

@router.get("", response_model=list[ChartRecord])
def my_charts(storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.list_user_charts(storage, user)

@router.get("/file/{file_id}", response_model=list[ChartRecord])
def charts_for_file(file_id: str, storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.list_file_charts(storage, file_id, user)

@router.get("/{chart_id}/series", response_model=ChartSeries)
def chart_series(chart_id: str, storage: Storage = Depends(get_storage), user: UserRecord = Depends(get_current_user)):
    return service.chart_series(storage, chart_id, user)
