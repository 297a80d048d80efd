#!/usr/bin/env python3
"""Run the EventPro API with uvicorn for local development"""

import os

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "eventpro.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8000)),
        reload=os.getenv("ENVIRONMENT", "development") == "development",
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
