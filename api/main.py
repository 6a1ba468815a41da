import logging
from contextlib import asynccontextmanager

import aiohttp
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from config import load_config
from converter import CurrencyConverter
from errors import ConversionError
from rate_fetcher import ExchangeRateApiFetcher

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("currency-converter-api")


def log_event(event: str, fields: dict) -> None:
    logger.debug("event=%s %s", event, fields)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config()
    session = aiohttp.ClientSession()
    app.state.fetcher = ExchangeRateApiFetcher(
        config.base_url,
        config.access_key,
        session=session,
        timeout=config.timeout,
        on_event=log_event,
    )
    logger.info("Using exchange rate provider at %s", config.base_url)
    try:
        yield
    finally:
        await session.close()


app = FastAPI(title="Currency Converter", lifespan=lifespan)


class ConvertRequest(BaseModel):
    source: str
    target: str
    amount: float = Field(allow_inf_nan=False)


class ConvertResponse(BaseModel):
    source: str
    target: str
    amount: float
    result: float | None = None
    error: str | None = None


def get_converter(request: Request) -> CurrencyConverter:
    return CurrencyConverter(request.app.state.fetcher)


@app.exception_handler(ConversionError)
async def conversion_error_handler(request: Request, exc: ConversionError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = "Invalid request parameters"
    if request.url.path == "/convert":
        return JSONResponse({"error": message}, status_code=400)
    return PlainTextResponse(message, status_code=400)


@app.get("/currencies/convert", response_class=PlainTextResponse)
async def convert_query(
    source: str,
    target: str,
    amount: float,
    converter: CurrencyConverter = Depends(get_converter),
) -> str:
    result = await converter.convert(source, target, amount)
    return str(result)


@app.post("/convert", response_model=ConvertResponse)
async def convert_endpoint(
    req: ConvertRequest,
    converter: CurrencyConverter = Depends(get_converter),
):
    response = ConvertResponse(source=req.source, target=req.target, amount=req.amount)
    try:
        response.result = await converter.convert(req.source, req.target, req.amount)
    except ConversionError as exc:
        response.error = exc.message
        return JSONResponse(response.model_dump(), status_code=exc.status_code)
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, log_level="info")
