"""TreeIndex - indexed GEDCOM record browser backend.

FastAPI server that loads a GEDCOM file into indexed record collections and
answers tag and cross-reference queries over it.
"""

import logging

from config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("treeindex")

from fastapi import FastAPI, HTTPException, UploadFile, File, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from gedcom_document import GedcomDocument, GedcomLoadError, get_individual_data, load_gedcom_content
from gedcom_records import GedcomRecord, render_record_tree
from record_list import set_index_verification

set_index_verification(settings.verify_index)

# Global state
current_document: GedcomDocument | None = None


# Create FastAPI app
app = FastAPI(
    title="TreeIndex",
    description="Indexed GEDCOM record browser",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class RecordModel(BaseModel):
    """One GEDCOM line."""
    id: str
    level: int
    tag: str
    xref: str
    data: str
    child_count: int

    @classmethod
    def from_record(cls, record: GedcomRecord) -> "RecordModel":
        return cls(
            id=record.id,
            level=record.level,
            tag=record.tag,
            xref=record.xref,
            data=record.data,
            child_count=len(record.children),
        )


class RecordDetailResponse(BaseModel):
    """A record with its children and the GEDCOM lines of its subtree."""
    record: RecordModel
    children: list[RecordModel]
    lines: list[str]


class GedcomUploadResponse(BaseModel):
    """Response after uploading a GEDCOM file."""
    message: str
    record_count: int
    summary: dict[str, int]


def _require_document() -> GedcomDocument:
    if current_document is None:
        logger.warning("Attempted to query records without GEDCOM loaded")
        raise HTTPException(status_code=400, detail="No GEDCOM file loaded. Upload one first.")
    return current_document


def _require_record(document: GedcomDocument, record_id: str) -> GedcomRecord:
    record = document.get(record_id)
    if record is None:
        logger.warning(f"Record {record_id} not found in GEDCOM")
        raise HTTPException(status_code=404, detail=f"Record with ID {record_id} not found")
    return record


# Endpoints

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    logger.debug("Health check requested")
    return {
        "status": "healthy",
        "document_loaded": current_document is not None,
    }


@app.post("/upload-gedcom", response_model=GedcomUploadResponse)
async def upload_gedcom(file: UploadFile = File(...)):
    """Upload and load a GEDCOM file."""
    global current_document

    logger.info(f"Received GEDCOM file upload: {file.filename}")

    if not file.filename or not file.filename.lower().endswith((".ged", ".gedcom")):
        logger.warning(f"Invalid file type: {file.filename}")
        raise HTTPException(status_code=400, detail="File must be a GEDCOM file (.ged or .gedcom)")

    content = await file.read()
    logger.debug(f"Read {len(content)} bytes from file")
    try:
        content_str = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning(f"File {file.filename} is not valid UTF-8")
        raise HTTPException(status_code=400, detail="GEDCOM file must be UTF-8 encoded")

    try:
        document = load_gedcom_content(content_str)
    except GedcomLoadError as e:
        logger.error(f"Failed to load GEDCOM file: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    current_document = document
    logger.info(f"Successfully loaded GEDCOM file with {len(document)} top-level records")
    return GedcomUploadResponse(
        message=f"Successfully loaded GEDCOM file: {file.filename}",
        record_count=len(document),
        summary=document.summary(),
    )


@app.get("/records", response_model=list[RecordModel])
async def get_records(tag: list[str] | None = Query(default=None)):
    """Get top-level records, optionally limited to the given tags."""
    document = _require_document()
    records = document.records.all_by_any_tag(tag) if tag else document.records
    logger.debug(f"Returning top-level records for tags={tag}")
    return [RecordModel.from_record(record) for record in records]


@app.get("/records/{record_id}", response_model=RecordDetailResponse)
async def get_record(record_id: str):
    """Get a top-level record with its direct children and rendered lines."""
    document = _require_document()
    record = _require_record(document, record_id)
    return RecordDetailResponse(
        record=RecordModel.from_record(record),
        children=[RecordModel.from_record(child) for child in record.children],
        lines=render_record_tree(record).split("\n"),
    )


@app.get("/records/{record_id}/children", response_model=list[RecordModel])
async def get_record_children(record_id: str, tag: list[str] | None = Query(default=None)):
    """Get a record's children in document order, optionally limited to the given tags."""
    document = _require_document()
    record = _require_record(document, record_id)
    children = record.children.all_by_any_tag(tag) if tag else record.children
    return [RecordModel.from_record(child) for child in children]


@app.get("/individuals")
async def get_individuals():
    """Get all individuals from the loaded GEDCOM file."""
    document = _require_document()
    individuals = [get_individual_data(individual) for individual in document.individuals()]
    logger.info(f"Returning {len(individuals)} individuals")
    return {"individuals": individuals}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
