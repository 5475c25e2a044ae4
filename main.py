import logging
import os
from datetime import datetime

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database import Base, engine
from crud.api.v1.endpoints import customers, inventory, ledger, reports
import models  # noqa: F401  registers the tables on Base.metadata

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("shop_ledger")

app = FastAPI(title="Shop Ledger API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def exception_handling(request, call_next):
    try:
        return await call_next(request)
    except Exception as e:
        logger.exception("error processing %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": f"Internal server error occurred: {str(e)}"}
        )

Base.metadata.create_all(bind=engine)


app.include_router(customers.router, prefix="/api/v1/customers", tags=["customers"])
app.include_router(ledger.router, prefix="/api/v1/customers", tags=["ledger"])
app.include_router(inventory.router, prefix="/api/v1/inventory", tags=["inventory"])
app.include_router(reports.router, prefix="/api/v1/reports", tags=["reports"])


@app.get("/health", tags=["system"])
def health_check():
    return {"status": "ok", "timestamp": datetime.now().isoformat()}

if __name__ == '__main__':
    port = int(os.environ.get("PORT", 8000))

    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=False)
