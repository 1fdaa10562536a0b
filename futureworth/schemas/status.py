"""Pydantic schemas for the health, status and echo endpoints."""

from pydantic import BaseModel, Field


class PingResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class StatusResponse(BaseModel):
    status: str
    environment: str
    version: str
    uptime_seconds: float
    python: str
    timestamp: str


class EchoRequest(BaseModel):
    message: str = Field(..., min_length=1)


class EchoResponse(BaseModel):
    echo: str
    length: int
    timestamp: str
