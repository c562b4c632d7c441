# carrier/server.py
"""
FastAPI server for the carrier CLI.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from carrier.analysis.env import CarrierEnv
from carrier.utils.log import get_logger
from carrier.utils.validate import CellUpdate, LocationUpdate, PredictionRow, prediction_rows

logger = get_logger(__name__)


def create_app(env: CarrierEnv) -> FastAPI:
    """
    Build a FastAPI instance bound to a loaded prediction engine.
    """
    app = FastAPI()
    app.state.env = env

    @app.get("/api/status", response_class=JSONResponse)
    async def status() -> JSONResponse:
        return JSONResponse(status_code=200, content={"status": "ok"})

    @app.get("/api/days", response_class=JSONResponse)
    async def get_days(request: Request) -> JSONResponse:
        return JSONResponse(status_code=200, content={"days": len(request.app.state.env.days)})

    @app.get("/api/cell", response_class=JSONResponse)
    async def get_cell(request: Request) -> JSONResponse:
        return JSONResponse(status_code=200, content={"cell": request.app.state.env.current_cell})

    @app.post("/api/cell", response_class=JSONResponse)
    async def set_cell(request: Request, update: CellUpdate) -> JSONResponse:
        request.app.state.env.update_cell(update.cell)
        return JSONResponse(status_code=200, content={"cell": update.cell})

    # sync handlers run in the threadpool
    @app.post("/api/location", response_model=list[PredictionRow])
    def set_location(request: Request, update: LocationUpdate):
        """
        Recompute the prediction for the reported position and return it.
        """
        env = request.app.state.env
        env.update_location(update.lng, update.lat, update.time)
        return prediction_rows(env.get_prediction())

    @app.get("/api/prediction", response_model=list[PredictionRow])
    def get_prediction(request: Request):
        return prediction_rows(request.app.state.env.get_prediction())

    return app
