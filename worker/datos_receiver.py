import json
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", "102400"))  # 100 KiB


def public_url():
    host = "localhost" if HOST in ("0.0.0.0", "") else HOST
    return f"http://{host}:{PORT}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    print(f"API corriendo en {public_url()}")
    yield


app = FastAPI(lifespan=lifespan)


def reject_constant(name):
    raise ValueError(f"{name} is not a JSON value")


def too_large():
    return HTTPException(status_code=413, detail="request entity too large")


async def json_body(request: Request):
    """
    Parse the raw request body as JSON before the route handler runs.
    Any JSON value is accepted; empty or malformed bodies are rejected.
    Reading stops as soon as the body passes MAX_BODY_BYTES.
    """
    length = request.headers.get("content-length", "")
    if length.isdigit() and int(length) > MAX_BODY_BYTES:
        raise too_large()

    raw = bytearray()
    async for chunk in request.stream():
        raw.extend(chunk)
        if len(raw) > MAX_BODY_BYTES:
            raise too_large()

    if not raw.strip():
        raise HTTPException(status_code=400, detail="empty request body")
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="request body is not valid UTF-8")
    try:
        return json.loads(text, parse_constant=reject_constant)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"invalid JSON: {e.msg}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"invalid JSON: {e}")


@app.post("/api/datos")
async def recibir_datos(payload=Depends(json_body)):
    print("[DATOS RECIBIDOS]", payload)
    return JSONResponse({"status": "OK"})


def main():
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
