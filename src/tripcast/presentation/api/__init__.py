"""
API package.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routes import region, traffic, trips
from ...common.exceptions import InvalidModeProfile, UnknownTransportMode

# Initialize main app
app = FastAPI(title="Tripcast API")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(region.app.router, tags=["region"])
app.include_router(traffic.app.router, tags=["traffic"])
app.include_router(trips.app.router, tags=["trips"])


@app.exception_handler(UnknownTransportMode)
async def unknown_mode_handler(request: Request, exc: UnknownTransportMode):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InvalidModeProfile)
async def invalid_profile_handler(request: Request, exc: InvalidModeProfile):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})
