"""
Secondary listener answering a plain-text liveness string on GET /.

It runs on its own port next to the API (see run.py) and shares no state
with it.
"""
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

LIVENESS_TEXT = "Todo Summary Assistant Backend is Running!"

liveness_app = FastAPI(title="Todo Summary Backend Liveness", docs_url=None, redoc_url=None, openapi_url=None)


# PUBLIC_INTERFACE
@liveness_app.get("/", response_class=PlainTextResponse, summary="Liveness")
def liveness() -> str:
    return LIVENESS_TEXT
