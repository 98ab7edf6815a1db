"""
Voice Gateway Service.

Bot Framework endpoint that answers Teams messages through a Flowise RAG agent.
It handles:
- Text questions, forwarded to Flowise.
- Voice notes: authenticated download, ffmpeg transcode to 16 kHz mono PCM,
  AssemblyAI streaming transcription, then the same Flowise call.
- Distributed tracing with Datadog.
- Structured JSON logging.
"""

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI

from dependencies import get_port
from routes import health_router, messages_router

patch_all()

app = FastAPI(title="Voice Gateway")
app.include_router(messages_router)
app.include_router(health_router)


def main():
    """Serves the API."""
    uvicorn.run(app, host="0.0.0.0", port=get_port(), log_config=None)


if __name__ == "__main__":
    main()
