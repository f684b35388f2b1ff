import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from workout_engine.api.workouts import router as workouts_router
from workout_engine.api.exercises import router as exercises_router
from workout_engine.core.config import settings


logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title="Workout description engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(workouts_router)
app.include_router(exercises_router)


@app.get("/")
def root():
    return {"message": "Workout description engine is running"}
