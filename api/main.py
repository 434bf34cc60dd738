import json
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from psycopg import Error as DatabaseError

from api.db import initialize_database
from api.helpers.seizure_helpers import insert_reviewed_seizure, seizure_response
from api.repositories.raw_event_ingest import insert_raw_event_ingest
from api.repositories.seizures import SOURCE_MANUAL, insert_seizure, list_seizures
from api.schemas import (
    ImportCommitIn,
    ImportCommitOut,
    ImportParseIn,
    ImportParseOut,
    SeizureIn,
    SeizureOut,
)
from ingestion.commit_batch import commit_records
from ingestion.export_csv import export_seizures_csv
from ingestion.ingest_text import parse_import_text
from ingestion.normalize_event import NormalizationError, normalize_seizure


@asynccontextmanager
async def _lifespan(app: FastAPI):
    _ = app
    initialize_database()
    yield


app = FastAPI(
    title="Seizure Log API",
    version="0.1.0",
    lifespan=_lifespan,
)
logger = logging.getLogger(__name__)


def _cors_allow_origins() -> list[str]:
    configured = os.getenv("CORS_ALLOW_ORIGINS", "")
    if configured.strip():
        return [origin.strip().rstrip("/") for origin in configured.split(",") if origin.strip()]
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

_cors_allow_origin_regex = os.getenv("CORS_ALLOW_ORIGIN_REGEX", "").strip() or None

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_allow_origins(),
    allow_origin_regex=_cors_allow_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# timeline, newest first
@app.get("/seizures", response_model=list[SeizureOut])
def get_seizures():
    return [seizure_response(row) for row in list_seizures()]


# caregiver logs one seizure by hand
@app.post("/seizures", response_model=SeizureOut, status_code=201)
def create_seizure(payload: SeizureIn):
    # normalize/validate first so db inserts always recieve standardized shape
    try:
        normalized = normalize_seizure(payload)
    except NormalizationError as exc:
        # keep failed payload for later review in raw_seizure_ingest table
        insert_raw_event_ingest(json.dumps(payload.model_dump()), "failed", str(exc))
        raise HTTPException(status_code=400, detail=str(exc))

    try:
        created_id = insert_seizure(
            normalized["date_time"],
            normalized["duration_minutes"],
            normalized["duration_seconds"],
            normalized["trigger"],
            normalized["description"],
            source=SOURCE_MANUAL,
        )
    except DatabaseError:
        logger.exception("Seizure insert failed")
        raise HTTPException(status_code=500, detail="Failed to save seizure.")
    return seizure_response({"id": created_id, **normalized})


# staging step: parse pasted notes or an exported table, persist nothing
@app.post("/imports/parse", response_model=ImportParseOut)
def parse_import(payload: ImportParseIn):
    return parse_import_text(payload.raw_text).to_dict()


# commit step: reviewer-approved rows are written one at a time
@app.post("/imports/commit", response_model=ImportCommitOut)
def commit_import(payload: ImportCommitIn):
    return commit_records(payload.records, insert_reviewed_seizure).to_dict()


# same format the importer restores from
@app.get("/seizures/export")
def export_seizures():
    return Response(
        content=export_seizures_csv(list_seizures()),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="seizures.csv"'},
    )
