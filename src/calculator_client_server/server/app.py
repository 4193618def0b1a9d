"""HTTP server exposing the calculation engine."""
import math
from typing import Optional

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from calculator_client_server.common.config import Settings
from calculator_client_server.common.engine import Calculator
from calculator_client_server.common.logger import logger
from calculator_client_server.common.operations import CalculationRequest
from calculator_client_server.server.auth import BasicAuthMiddleware

GREETING = "Hello World!"

router = APIRouter()


def encode_result(value: float) -> Optional[float]:
    """
    Convert a result into something JSON can carry.

    JSON has no NaN or Infinity, so results without a finite value travel as null.

    :param float value: Engine result

    :return: The value, or None when it is not finite
    :rtype: Optional[float]
    """
    return value if math.isfinite(value) else None


@router.get("/", response_class=PlainTextResponse)
def get_hello() -> str:
    return GREETING


@router.post("/", status_code=status.HTTP_201_CREATED)
def calculation(payload: CalculationRequest) -> JSONResponse:
    result: float = Calculator.compute(payload.a, payload.b, payload.op)
    logger.info(f"🧮 {payload} = {result}")
    return JSONResponse(content=encode_result(result), status_code=status.HTTP_201_CREATED)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the calculator application.

    :param settings: Server settings, read from the environment when omitted

    :return: Configured application
    :rtype: FastAPI
    """
    settings = settings or Settings.from_env()

    app = FastAPI(title="Calculator API")

    app.add_middleware(
        BasicAuthMiddleware,
        username=settings.basic_auth_user,
        password=settings.basic_auth_pass,
    )
    # Added last so it wraps auth: CORS preflight requests carry no credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app
