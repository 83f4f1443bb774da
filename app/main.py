# app/main.py
from fastapi import FastAPI
from app.api.routes import router as api_router

app = FastAPI(title="SEO Readiness Analyzer")

app.include_router(api_router, prefix="/api")
