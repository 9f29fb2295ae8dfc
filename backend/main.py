"""Main entry point for the job-intake chat API."""
import logging
from typing import Optional
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import PORT, CORS_ORIGINS, LOG_LEVEL, LOG_FORMAT
from errors import ValidationError, ProviderError, ExtractionError
from logger import setup_logging
from models.api import (
    TurnRequest,
    TurnResponse,
    FinalizeRequest,
    FinalizeResponse,
    HistoryEntry,
    HistoryResponse,
)
from services.conversation_manager import ConversationManager
from services.export_sink import ExportSink
from services.llm_client import LLMClient, LLMClientError
from services.orchestrator import ConversationOrchestrator
from services.spec_loader import SpecificationLoader

# Initialize logging
setup_logging(LOG_LEVEL, LOG_FORMAT)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Job Intake Chat",
    description="Conversational job intake backed by an LLM, with structured export",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services (will be done on startup)
orchestrator: ConversationOrchestrator = None


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global orchestrator

    logger.info("Initializing job intake chat services...")

    try:
        history_store = ConversationManager()
        orchestrator = ConversationOrchestrator(
            spec_loader=SpecificationLoader(),
            history_store=history_store,
            llm_client=LLMClient(),
            export_sink=ExportSink(client=history_store.client),
        )
        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Job Intake Chat API"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "job-intake-chat",
        "version": "1.0.0"
    }


@app.post("/chat", response_model=TurnResponse)
@app.post("/openai", response_model=TurnResponse, include_in_schema=False)
def chat_endpoint(request: TurnRequest):
    """
    Reply to one chat turn.

    Returns ``{reply}``; ``{error}`` with 400 for missing fields, 503 for
    provider failures and 500 for anything else.
    """
    try:
        reply = orchestrator.handle_turn(request.prompt, request.user)
        return TurnResponse(reply=reply)
    except ValidationError as e:
        return _error(400, str(e))
    except LLMClientError as e:
        logger.error(f"LLM client error: {e.error.message}", extra={"error_code": e.error.code})
        return _error(503, e.error.message)
    except ProviderError as e:
        logger.error(f"Provider error: {e}")
        return _error(503, str(e))
    except Exception as e:
        logger.error(f"Unexpected error processing chat turn: {e}", exc_info=True)
        return _error(500, "Internal server error")


@app.post("/finalize", response_model=FinalizeResponse)
def finalize_endpoint(request: FinalizeRequest):
    """
    Finalize a conversation and export its job record.

    Returns ``{message}``; ``{error}`` with 400 for a missing user, 503 for
    provider failures, 502 when no record could be extracted and 500 otherwise.
    """
    try:
        message = orchestrator.finalize(request.user)
        return FinalizeResponse(message=message)
    except ValidationError as e:
        return _error(400, str(e))
    except ProviderError as e:
        logger.error(f"Provider error during finalize: {e}")
        return _error(503, str(e))
    except ExtractionError as e:
        logger.error(f"Could not extract job record: {e}")
        return _error(502, f"Could not extract job record: {e}")
    except Exception as e:
        logger.error(f"Unexpected error finalizing conversation: {e}", exc_info=True)
        return _error(500, "Internal server error")


@app.get("/history", response_model=HistoryResponse)
def history_endpoint(user: Optional[str] = Query(default=None)):
    """Return the stored conversation of a user, oldest turn first."""
    try:
        turns = orchestrator.get_history(user)
        return HistoryResponse(
            chatHistory=[HistoryEntry(role=t.role, content=t.content) for t in turns]
        )
    except ValidationError as e:
        return _error(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error loading history: {e}", exc_info=True)
        return _error(500, "Internal server error")


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Job Intake Chat API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
