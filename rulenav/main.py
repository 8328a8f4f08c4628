from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from rulenav.core.errors import APIError
from rulenav.log_utils import inject_request_id, setup_logging
from rulenav.routers.api import api_router


load_dotenv()

app = FastAPI(title="Ruleset Navigator", version="0.1.0")
setup_logging()


@app.middleware("http")
async def add_req_id(request, call_next):
    return await inject_request_id(request, call_next)


@app.exception_handler(APIError)
async def api_error_handler(request: Request, exc: APIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


app.include_router(api_router)
