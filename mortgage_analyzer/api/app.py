"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mortgage_analyzer.api.routes import buydown, mortgage, tax
from mortgage_analyzer.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Mortgage Analyzer",
    description="Mortgage payment, amortization, tax benefit and rate buydown analysis",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(mortgage.router)
app.include_router(tax.router)
app.include_router(buydown.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
