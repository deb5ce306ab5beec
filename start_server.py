#!/usr/bin/env python3
"""
Server startup script for the GST verification service
"""
import uvicorn

from gst_verify.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "gst_verify.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower()
    )
