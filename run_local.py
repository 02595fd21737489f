"""
Run the API locally with uvicorn (auto-reload, no deployment needed).

Usage:
    python run_local.py
"""

import uvicorn

from savesmart.config import settings

uvicorn.run("savesmart.main:app", host=settings.host, port=settings.port, reload=True)
