#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Serves app.main:app with auto-reload; the database comes from DATABASE_URL
(SQLite file by default) and tables are created on startup.
"""
from pathlib import Path
import sys

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
        log_level=settings.log_level.lower(),
    )
