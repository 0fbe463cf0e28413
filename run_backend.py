#!/usr/bin/env python
"""Script to run the Task Tracker API server."""
import os
from pathlib import Path

# Run from the repository root so the default sqlite path resolves there
os.chdir(Path(__file__).resolve().parent)

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "task_tracker.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("RELOAD", "true").lower() == "true",
    )
